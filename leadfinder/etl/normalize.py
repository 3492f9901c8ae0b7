"""Utilities for turning Gemini reply text into Business records."""

import json
import logging
import math
import re
import uuid
from typing import Any, Dict, List, Optional

from leadfinder.core.models import SOCIAL_PLATFORMS, Business

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Unknown Business"
DEFAULT_ADDRESS = "No address provided"
DEFAULT_CATEGORY = "General"

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class EmptyResponse(RuntimeError):
    """Raised when the search service returned no usable text."""


class MalformedResponse(RuntimeError):
    """Raised when the reply text is not a JSON array of objects."""

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model may wrap its JSON in."""
    return _FENCE_RE.sub("", text).strip()


def parse_businesses(raw_text: Optional[str]) -> List[Business]:
    if not raw_text or not raw_text.strip():
        raise EmptyResponse("No data received from the search service.")

    clean_text = strip_code_fences(raw_text)
    try:
        data = json.loads(clean_text)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse JSON from search reply: %s", raw_text)
        raise MalformedResponse(f"Reply is not valid JSON: {exc}", raw_text) from exc

    if not isinstance(data, list):
        logger.error("Search reply is not a JSON array: %s", raw_text)
        raise MalformedResponse("Reply is not a JSON array", raw_text)

    batch = uuid.uuid4().hex[:8]
    businesses: List[Business] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.error("Element %d of search reply is not an object: %r", index, item)
            raise MalformedResponse(f"Element {index} is not a JSON object", raw_text)
        businesses.append(to_business(item, f"biz-{batch}-{index}"))
    return businesses


def to_business(item: Dict[str, Any], record_id: str) -> Business:
    """Map one loosely-typed reply object onto a Business, applying the default table."""
    rating = _safe_float(item.get("rating"))
    return Business(
        id=record_id,
        name=_strip_or_none(item.get("name")) or DEFAULT_NAME,
        address=_strip_or_none(item.get("address")) or DEFAULT_ADDRESS,
        phone_number=_strip_or_none(item.get("phoneNumber")),
        website=_strip_or_none(item.get("website")),
        rating=rating or None,
        review_count=_safe_int(item.get("reviewCount")) or 0,
        category=_strip_or_none(item.get("category")) or DEFAULT_CATEGORY,
        open_status=_strip_or_none(item.get("openStatus")),
        email=_strip_or_none(item.get("email")),
        social_media=_social_links(item.get("socialMedia")),
    )


def _social_links(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    links: Dict[str, str] = {}
    for platform in SOCIAL_PLATFORMS:
        url = _strip_or_none(value.get(platform))
        if url:
            links[platform] = url
    return links


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    value_str = str(value).strip()
    return value_str or None


def _safe_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # json.loads accepts NaN and 1e999; neither is a usable score.
    return number if math.isfinite(number) else None


def _safe_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return max(int(value), 0)

    if isinstance(value, str):
        digits = "".join(ch for ch in value if ch.isdigit())
        if digits:
            return int(digits)
    return None
