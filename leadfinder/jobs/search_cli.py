"""CLI job to search businesses, list those without a website and export them."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from leadfinder.core.config import get_settings
from leadfinder.core.history import QueryHistory
from leadfinder.core.models import TabView
from leadfinder.core.session import SearchSession
from leadfinder.etl import views
from leadfinder.etl.export import EXPORT_FORMATS, SerializationError, export_businesses
from leadfinder.etl.templates import build_prompt, outreach_message

logger = logging.getLogger(__name__)


def run_search_job(
    *,
    query: str,
    tab: Optional[str],
    exports: List[str],
    out_dir: Path,
    show_prompt: bool = False,
    show_outreach: bool = False,
    session: Optional[SearchSession] = None,
) -> int:
    """Run one search and return the process exit code."""
    if session is None:
        settings = get_settings()
        session = SearchSession(history=QueryHistory(settings.history_path, settings.history_limit))

    session.search(query)
    if session.state.error:
        logger.error("Search failed: %s", session.state.error)
        return 1

    if tab:
        session.set_tab(tab)
    businesses = session.filtered()
    logger.info(
        "Found %d businesses, %d without website; showing tab=%s (%d)",
        len(session.businesses),
        session.no_website_count(),
        session.active_tab.value,
        len(businesses),
    )

    for business in businesses:
        marker = "" if views.has_website(business) else " [NO WEBSITE]"
        print(f"{business.name}{marker} - {business.category} - {business.address}")
        if views.has_website(business):
            continue
        if show_prompt:
            print(build_prompt(business))
            print()
        if show_outreach:
            print(outreach_message(business))
            print()

    leads = session.filtered(TabView.NO_WEBSITE)
    if exports and not leads:
        logger.warning("Every business has a website; nothing to export")
        return 0

    for fmt in exports:
        try:
            path = export_businesses(leads, fmt, out_dir)
        except SerializationError as exc:
            logger.error("Export to %s failed: %s", fmt, exc)
            return 1
        print(f"Wrote {path}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find local businesses that have no website")
    parser.add_argument("query", help="Free-text search, e.g. 'Plumbers in Brooklyn'")
    parser.add_argument(
        "--tab",
        choices=[item.value for item in TabView],
        help="Which list to show; defaults to no-website when any business lacks one",
    )
    parser.add_argument(
        "--export",
        dest="exports",
        action="append",
        choices=EXPORT_FORMATS,
        default=[],
        help="Export the shown list (repeatable)",
    )
    parser.add_argument(
        "--out",
        dest="out_dir",
        type=Path,
        default=get_settings().export_dir,
        help="Directory for export files",
    )
    parser.add_argument("--prompt", dest="show_prompt", action="store_true", help="Print a site-builder prompt per lead")
    parser.add_argument("--outreach", dest="show_outreach", action="store_true", help="Print an outreach message per lead")
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args()

    if not args.query.strip():
        parser.error("query must not be empty")

    exit_code = run_search_job(
        query=args.query,
        tab=args.tab,
        exports=args.exports,
        out_dir=args.out_dir,
        show_prompt=args.show_prompt,
        show_outreach=args.show_outreach,
    )
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
