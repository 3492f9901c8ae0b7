"""Client utilities for the Gemini generateContent API."""

import logging
from typing import Any, Dict, List, Optional

import requests

from leadfinder.core.config import Settings, get_settings
from leadfinder.core.models import Business
from leadfinder.etl.normalize import parse_businesses

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

SEARCH_PROMPT_TEMPLATE = """
Find businesses matching the query: "{query}".

I need a detailed list of at least 10-15 businesses if possible.
For each business, I specifically need to know if they have a website URL.

CRITICAL: Also search for and extract their contact details if available in the listing or related info:
- Email address
- Social Media links (Instagram, Facebook, Twitter, LinkedIn)

Return the data strictly as a JSON array of objects.
Do NOT use Markdown code blocks. Just the raw JSON string.

Each object must have these fields:
- name (string)
- address (string)
- phoneNumber (string or null)
- website (string URL or null/empty string if not found)
- rating (number or null)
- reviewCount (number or null)
- category (string)
- openStatus (string e.g. "Open Now", "Closed")
- email (string or null)
- socialMedia (object with keys: instagram, facebook, twitter, linkedin - values as string URLs or null)

Make sure to accurately report the 'website' field. If the Google Maps data doesn't show a website, leave it empty or null.
"""


class TransportFailure(RuntimeError):
    """Raised when the Gemini API call itself fails (network, auth, quota)."""


def build_search_prompt(query: str) -> str:
    return SEARCH_PROMPT_TEMPLATE.format(query=query)


def find_businesses(
    query: str,
    api_key: str,
    model: str = "gemini-2.5-flash",
    temperature: float = 0.4,
    timeout: int = 60,
) -> str:
    """Ask Gemini (grounded on Google Maps) for businesses and return the raw reply text."""
    if not api_key:
        raise TransportFailure("GEMINI_API_KEY is required")

    body = {
        "contents": [{"role": "user", "parts": [{"text": build_search_prompt(query)}]}],
        "tools": [{"googleMaps": {}}],
        "generationConfig": {"temperature": temperature},
    }
    try:
        response = _SESSION.post(
            f"{_BASE_URL}/{model}:generateContent",
            params={"key": api_key},
            json=body,
            timeout=timeout,
        )
    except requests.RequestException as exc:
        logger.error("generateContent request failed: %s", exc)
        raise TransportFailure(str(exc)) from exc

    payload = _json_or_empty(response)
    if response.status_code >= 400:
        error = payload.get("error") or {}
        message = error.get("message") or f"Gemini API returned HTTP {response.status_code}"
        logger.error("generateContent failed: status=%s, error_message=%s", response.status_code, message)
        raise TransportFailure(message)

    return _extract_text(payload)


def search_businesses(query: str, settings: Optional[Settings] = None) -> List[Business]:
    """Run one search end to end: Gemini call followed by normalization."""
    settings = settings or get_settings()
    logger.info("Searching businesses for query=%s model=%s", query, settings.gemini_model)
    raw_text = find_businesses(
        query,
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        temperature=settings.gemini_temperature,
        timeout=settings.gemini_timeout,
    )
    businesses = parse_businesses(raw_text)
    logger.info("Parsed %d businesses for query=%s", len(businesses), query)
    return businesses


def _json_or_empty(response: Any) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _extract_text(payload: Dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate; empty string when there are none."""
    candidates = payload.get("candidates") or []
    if not candidates:
        feedback = payload.get("promptFeedback") or {}
        if feedback.get("blockReason"):
            logger.warning("Prompt blocked by Gemini: %s", feedback.get("blockReason"))
        return ""
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))
