"""Flask JSON API exposing watchlist sessions."""
from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest

from ..config import DEFAULT_CONFIG, AppConfig
from ..errors import MissingIdentifier, NotFound
from ..services.registry import WatchlistRegistry
from ..services.watchlist_session import WatchlistSession
from ..storage.base import InMemoryStore, StoreAdapter
from ..storage.file_store import JsonFileStore
from ..storage.http_store import HttpKeyValueStore

logger = logging.getLogger(__name__)


def _json_body(expected: type) -> Any:
    body = request.get_json(silent=True)
    if not isinstance(body, expected):
        raise BadRequest(f"Request body must be a JSON {expected.__name__}")
    return body


def _check_item_fields(fields: dict[str, Any]) -> dict[str, Any]:
    for key in ("price", "quantity"):
        if key not in fields:
            continue
        value = fields[key]
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise BadRequest(f"{key} must be a number")
    return fields


def create_app(registry: WatchlistRegistry) -> Flask:
    app = Flask(__name__)
    app.config["watchlist_registry"] = registry

    def _session(watchlist_id: str) -> WatchlistSession:
        return registry.open(watchlist_id)

    def _existing_session(watchlist_id: str) -> WatchlistSession:
        session = registry.get(watchlist_id)
        if session is None:
            raise NotFound(f"Unknown watchlist: {watchlist_id}")
        return session

    def _state_response(session: WatchlistSession):
        return jsonify(session.to_dict())

    @app.errorhandler(MissingIdentifier)
    def handle_missing_identifier(exc: MissingIdentifier):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(NotFound)
    def handle_not_found(exc: NotFound):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(BadRequest)
    def handle_bad_request(exc: BadRequest):
        return jsonify({"error": exc.description}), 400

    @app.get("/watchlists")
    def list_watchlists():
        return jsonify({"watchlists": registry.ids()})

    @app.get("/watchlists/<watchlist_id>")
    def get_watchlist(watchlist_id: str):
        return _state_response(_existing_session(watchlist_id))

    @app.put("/watchlists/<watchlist_id>/items")
    def set_items(watchlist_id: str):
        items = _json_body(list)
        if not all(isinstance(item, dict) for item in items):
            raise BadRequest("Items must be JSON objects")
        for item in items:
            _check_item_fields(item)
        session = _session(watchlist_id)
        with registry.lock:
            session.set_items(items)
        return _state_response(session)

    @app.post("/watchlists/<watchlist_id>/items")
    def add_item(watchlist_id: str):
        body = _check_item_fields(_json_body(dict))
        quantity = request.args.get("quantity", default=1, type=int)
        session = _session(watchlist_id)
        with registry.lock:
            session.add_item(body, quantity)
        return _state_response(session), 201

    @app.delete("/watchlists/<watchlist_id>/items")
    def empty_watchlist(watchlist_id: str):
        session = _session(watchlist_id)
        with registry.lock:
            session.empty_watchlist()
        return _state_response(session)

    @app.get("/watchlists/<watchlist_id>/items/<item_id>")
    def get_item(watchlist_id: str, item_id: str):
        item = _existing_session(watchlist_id).get_item(item_id)
        if item is None:
            raise NotFound(f"Unknown item: {item_id}")
        return jsonify(item.to_dict())

    @app.patch("/watchlists/<watchlist_id>/items/<item_id>")
    def update_item(watchlist_id: str, item_id: str):
        body = _check_item_fields(_json_body(dict))
        session = _session(watchlist_id)
        with registry.lock:
            session.update_item(item_id, body)
        return _state_response(session)

    @app.put("/watchlists/<watchlist_id>/items/<item_id>/quantity")
    def update_item_quantity(watchlist_id: str, item_id: str):
        body = _json_body(dict)
        quantity = body.get("quantity")
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise BadRequest("quantity must be an integer")
        session = _session(watchlist_id)
        with registry.lock:
            session.update_item_quantity(item_id, quantity)
        return _state_response(session)

    @app.delete("/watchlists/<watchlist_id>/items/<item_id>")
    def remove_item(watchlist_id: str, item_id: str):
        session = _session(watchlist_id)
        with registry.lock:
            session.remove_item(item_id)
        return _state_response(session)

    @app.put("/watchlists/<watchlist_id>/metadata")
    def set_metadata(watchlist_id: str):
        body = _json_body(dict)
        session = _session(watchlist_id)
        with registry.lock:
            session.set_metadata(body)
        return _state_response(session)

    @app.patch("/watchlists/<watchlist_id>/metadata")
    def update_metadata(watchlist_id: str):
        body = _json_body(dict)
        session = _session(watchlist_id)
        with registry.lock:
            session.update_metadata(body)
        return _state_response(session)

    @app.delete("/watchlists/<watchlist_id>/metadata")
    def clear_metadata(watchlist_id: str):
        session = _session(watchlist_id)
        with registry.lock:
            session.clear_metadata()
        return _state_response(session)

    return app


def build_store(config: AppConfig) -> StoreAdapter:
    """Create the store adapter selected by ``config.storage.backend``."""

    storage = config.storage
    if storage.backend == "memory":
        return InMemoryStore()
    if storage.backend == "http":
        if not storage.http_base_url:
            raise ValueError("storage.http_base_url is required for the http backend")
        return HttpKeyValueStore(base_url=storage.http_base_url, timeout=storage.http_timeout_seconds)
    config.ensure_data_directories()
    return JsonFileStore(config.data_directory / "watchlists")


def bootstrap_app(config: AppConfig = DEFAULT_CONFIG) -> tuple[Flask, WatchlistRegistry]:
    """Factory used by the entrypoint for running the web API."""

    store = build_store(config)
    logger.info("Using %s store for watchlists", config.storage.backend)
    registry = WatchlistRegistry(store=store, config=config)
    app = create_app(registry)
    return app, registry
