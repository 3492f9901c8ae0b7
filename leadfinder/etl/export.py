"""CSV and JSON exports of the currently filtered business list."""

import json
import logging
from pathlib import Path
from typing import Any, List, Sequence

from leadfinder.core.models import Business

logger = logging.getLogger(__name__)

CSV_FILENAME = "no-website-leads.csv"
JSON_FILENAME = "no-website-leads.json"
CSV_HEADERS = ("Name", "Category", "Phone", "Email", "Address", "Rating", "Reviews", "Instagram", "Facebook")
EXPORT_FORMATS = ("csv", "json")


class SerializationError(RuntimeError):
    """Raised when the business list cannot be serialized for export."""


def to_csv(businesses: Sequence[Business]) -> str:
    """Render businesses as CSV text.

    String columns are wrapped in double quotes without escaping, so names or
    addresses containing ``"`` produce malformed rows. Numeric columns are left
    unquoted and rendered empty when missing or zero.
    """
    try:
        lines = [",".join(CSV_HEADERS)]
        for business in businesses:
            social = business.social_media or {}
            lines.append(
                ",".join(
                    [
                        _quoted(business.name),
                        _quoted(business.category),
                        _quoted(business.phone_number),
                        _quoted(business.email),
                        _quoted(business.address),
                        _number(business.rating),
                        _number(business.review_count),
                        _quoted(social.get("instagram")),
                        _quoted(social.get("facebook")),
                    ]
                )
            )
    except (AttributeError, TypeError, ValueError) as exc:
        raise SerializationError(f"CSV export failed: {exc}") from exc
    return "\n".join(lines)


def to_json(businesses: Sequence[Business]) -> str:
    try:
        return json.dumps([business.to_dict() for business in businesses], ensure_ascii=False, indent=2, allow_nan=False)
    except (AttributeError, TypeError, ValueError) as exc:
        raise SerializationError(f"JSON export failed: {exc}") from exc


def businesses_from_json(text: str) -> List[Business]:
    """Load businesses back from a JSON export."""
    try:
        data = json.loads(text)
        return [Business.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as exc:
        raise SerializationError(f"Not a business export: {exc}") from exc


def export_businesses(businesses: Sequence[Business], fmt: str, directory: Path) -> Path:
    """Write an export file into ``directory`` and return its path.

    The text is fully rendered before the file is opened, so a failed export
    never leaves a partial file behind.
    """
    if fmt == "csv":
        content, filename = to_csv(businesses), CSV_FILENAME
    elif fmt == "json":
        content, filename = to_json(businesses), JSON_FILENAME
    else:
        raise ValueError(f"Unsupported export format: {fmt}")

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    with path.open("w", encoding="utf-8") as fh:
        fh.write(content)
    logger.info("Exported %d businesses to %s", len(businesses), path)
    return path


def _quoted(value: Any) -> str:
    return f'"{value or ""}"'


def _number(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
