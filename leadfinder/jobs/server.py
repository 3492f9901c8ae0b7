"""HTTP entrypoint exposing the business search session as a small JSON API."""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request

from leadfinder.core.config import get_settings
from leadfinder.core.history import QueryHistory
from leadfinder.core.models import TabView
from leadfinder.core.session import SearchInProgress, SearchSession
from leadfinder.etl.export import CSV_FILENAME, JSON_FILENAME, SerializationError, to_csv, to_json
from leadfinder.etl.templates import build_prompt, outreach_message

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App & session ----------
app = Flask(__name__)
_session: Optional[SearchSession] = None
_session_lock = threading.Lock()


def _get_session() -> SearchSession:
    global _session
    if _session is None:
        with _session_lock:
            if _session is None:
                settings = get_settings()
                _session = SearchSession(history=QueryHistory(settings.history_path, settings.history_limit))
    return _session


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "model": settings.gemini_model,
                "api_key_configured": bool(settings.gemini_api_key),
                "worker_port_config": settings.worker_port,
            }
        ),
        200,
    )


@app.post("/search")
def search() -> Any:
    """
    Run a business search and replace the current result set.
    Required JSON fields: query
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    query = str(payload.get("query") or "").strip()
    if not query:
        return jsonify({"error": "missing fields: query"}), 400

    session = _get_session()
    try:
        session.search(query)
    except SearchInProgress as exc:
        return jsonify({"error": str(exc)}), 409

    snapshot = session.snapshot()
    if session.state.error:
        return jsonify({"error": session.state.error, "data": snapshot}), 502
    return jsonify({"data": snapshot}), 200


@app.get("/businesses")
def list_businesses() -> Any:
    session = _get_session()
    raw_tab = request.args.get("tab") or session.active_tab.value
    try:
        tab = TabView(raw_tab)
    except ValueError:
        return jsonify({"error": f"unknown tab: {raw_tab}"}), 400
    businesses = session.filtered(tab)

    return (
        jsonify(
            {
                "data": {
                    "tab": tab.value,
                    "total": len(session.businesses),
                    "noWebsiteCount": session.no_website_count(),
                    "businesses": [business.to_dict() for business in businesses],
                }
            }
        ),
        200,
    )


@app.post("/tab")
def set_tab() -> Any:
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    session = _get_session()
    try:
        tab = session.set_tab(payload.get("tab"))
    except ValueError:
        valid = ", ".join(item.value for item in TabView)
        return jsonify({"error": f"tab must be one of: {valid}"}), 400
    return jsonify({"data": {"activeTab": tab.value}}), 200


@app.get("/businesses/<business_id>/prompt")
def business_prompt(business_id: str) -> Any:
    business = _get_session().get(business_id)
    if business is None:
        return jsonify({"error": "business not found"}), 404
    return jsonify({"data": {"id": business.id, "text": build_prompt(business)}}), 200


@app.get("/businesses/<business_id>/outreach")
def business_outreach(business_id: str) -> Any:
    business = _get_session().get(business_id)
    if business is None:
        return jsonify({"error": "business not found"}), 404
    return jsonify({"data": {"id": business.id, "text": outreach_message(business)}}), 200


@app.get("/export/<fmt>")
def export(fmt: str) -> Any:
    """Download the no-website leads as CSV or JSON.

    Only offered while the no-website tab is active and has entries.
    """
    session = _get_session()
    if session.active_tab is not TabView.NO_WEBSITE or session.no_website_count() == 0:
        return jsonify({"error": "export is only available on the no-website tab when it has leads"}), 409

    businesses = session.filtered(TabView.NO_WEBSITE)
    try:
        if fmt == "csv":
            body, filename, mimetype = to_csv(businesses), CSV_FILENAME, "text/csv"
        elif fmt == "json":
            body, filename, mimetype = to_json(businesses), JSON_FILENAME, "application/json"
        else:
            return jsonify({"error": "format must be csv or json"}), 400
    except SerializationError as exc:
        logger.exception("Export failed: %s", exc)
        return jsonify({"error": "export failed"}), 500

    logger.info("Serving %s export with %d businesses", fmt, len(businesses))
    return Response(
        body,
        mimetype=mimetype,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@app.get("/history")
def get_history() -> Any:
    history = _get_session().history
    entries = history.entries() if history is not None else []
    return jsonify({"data": {"queries": entries}}), 200


@app.delete("/history")
def clear_history() -> Any:
    history = _get_session().history
    if history is not None:
        history.clear()
    return jsonify({"data": {"queries": []}}), 200


def main() -> None:
    """Bind on PORT when the platform injects one, otherwise WORKER_PORT."""
    env_port = os.getenv("PORT")
    logger.info("[BOOT] ENV PORT=%s", env_port)

    port = int(env_port or get_settings().worker_port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)

    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
