"""Derived views over a result set. Nothing here is stored on the records."""

from typing import List, Sequence, Union

from leadfinder.core.models import Business, TabView


def has_website(business: Business) -> bool:
    return bool(business.website)


def filtered(businesses: Sequence[Business], tab: Union[TabView, str]) -> List[Business]:
    """Return the businesses visible under ``tab``, in source order.

    Raises ValueError for an unknown tab value.
    """
    tab = TabView(tab)
    if tab is TabView.NO_WEBSITE:
        return [business for business in businesses if not has_website(business)]
    return list(businesses)


def no_website_count(businesses: Sequence[Business]) -> int:
    return sum(1 for business in businesses if not has_website(business))


def select_tab(businesses: Sequence[Business]) -> TabView:
    """Tab to show right after a search completes."""
    if no_website_count(businesses) > 0:
        return TabView.NO_WEBSITE
    return TabView.ALL
