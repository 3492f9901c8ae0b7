"""Core data models shared by the search session, exporters and HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

SOCIAL_PLATFORMS = ("instagram", "facebook", "twitter", "linkedin")


class TabView(str, Enum):
    ALL = "all"
    NO_WEBSITE = "no-website"


@dataclass(slots=True)
class Business:
    """Normalized snapshot of a business returned by the search service."""

    id: str
    name: str
    address: str
    phone_number: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = None
    review_count: int = 0
    category: str = "General"
    open_status: Optional[str] = None
    email: Optional[str] = None
    social_media: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape used by the HTTP API and the JSON export."""
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "phoneNumber": self.phone_number,
            "website": self.website,
            "rating": self.rating,
            "reviewCount": self.review_count,
            "category": self.category,
            "openStatus": self.open_status,
            "email": self.email,
            "socialMedia": dict(self.social_media),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Business":
        return cls(
            id=data["id"],
            name=data["name"],
            address=data["address"],
            phone_number=data.get("phoneNumber"),
            website=data.get("website"),
            rating=data.get("rating"),
            review_count=data.get("reviewCount") or 0,
            category=data.get("category") or "General",
            open_status=data.get("openStatus"),
            email=data.get("email"),
            social_media=dict(data.get("socialMedia") or {}),
        )


@dataclass
class SearchState:
    query: str = ""
    is_loading: bool = False
    error: Optional[str] = None
    has_searched: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "isLoading": self.is_loading,
            "error": self.error,
            "hasSearched": self.has_searched,
        }
