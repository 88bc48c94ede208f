from __future__ import annotations

import pytest

from watchlist_state.config import AppConfig
from watchlist_state.services.registry import WatchlistRegistry
from watchlist_state.storage.base import InMemoryStore
from watchlist_state.storage.file_store import JsonFileStore
from watchlist_state.web.app import bootstrap_app, create_app


@pytest.fixture
def web_app():
    store = InMemoryStore()
    registry = WatchlistRegistry(store=store)
    registry.open("demo", default_items=[{"id": "a", "price": 1000}])

    app = create_app(registry)
    app.config.update(TESTING=True)

    return app, registry, store


def test_get_watchlist_returns_state(web_app) -> None:
    app, _, _ = web_app
    client = app.test_client()

    response = client.get("/watchlists/demo")

    assert response.status_code == 200
    assert response.json["id"] == "demo"
    assert response.json["totalItems"] == 1
    assert response.json["items"][0]["itemTotal"] == 1000


def test_add_item_merges_duplicates(web_app) -> None:
    app, registry, _ = web_app
    client = app.test_client()

    response = client.post("/watchlists/demo/items?quantity=2", json={"id": "a", "price": 1000})

    assert response.status_code == 201
    assert response.json["totalUniqueItems"] == 1
    assert registry.get("demo").get_item("a").quantity == 3


def test_add_item_without_id_is_rejected(web_app) -> None:
    app, _, _ = web_app
    client = app.test_client()

    response = client.post("/watchlists/demo/items", json={"price": 5})

    assert response.status_code == 400
    assert "id" in response.json["error"]


def test_item_routes(web_app) -> None:
    app, _, _ = web_app
    client = app.test_client()

    assert client.get("/watchlists/demo/items/a").json["price"] == 1000
    assert client.get("/watchlists/demo/items/missing").status_code == 404

    response = client.patch("/watchlists/demo/items/a", json={"label": "gift"})
    assert response.json["items"][0]["label"] == "gift"

    response = client.put("/watchlists/demo/items/a/quantity", json={"quantity": 4})
    assert response.json["items"][0]["itemTotal"] == 4000

    assert client.put("/watchlists/demo/items/zzz/quantity", json={"quantity": 1}).status_code == 404
    assert client.put("/watchlists/demo/items/a/quantity", json={"quantity": "many"}).status_code == 400

    response = client.delete("/watchlists/demo/items/a")
    assert response.json["isEmpty"] is True


def test_set_and_empty_items(web_app) -> None:
    app, _, store = web_app
    client = app.test_client()

    response = client.put("/watchlists/demo/items", json=[{"id": "x", "price": 1}, {"id": "y", "price": 2}])
    assert [item["id"] for item in response.json["items"]] == ["x", "y"]

    response = client.delete("/watchlists/demo/items")
    assert response.json["items"] == []
    assert response.json["id"] is None
    assert '"items": []' in store.load("watchlist-demo")

    assert client.put("/watchlists/demo/items", json={"id": "x"}).status_code == 400


def test_metadata_routes(web_app) -> None:
    app, _, _ = web_app
    client = app.test_client()

    assert client.put("/watchlists/demo/metadata", json={"coupon": "abc"}).json["metadata"] == {"coupon": "abc"}
    response = client.patch("/watchlists/demo/metadata", json={"notes": "door"})
    assert response.json["metadata"] == {"coupon": "abc", "notes": "door"}
    assert client.delete("/watchlists/demo/metadata").json["metadata"] == {}


def test_list_watchlists(web_app) -> None:
    app, _, _ = web_app
    client = app.test_client()
    client.delete("/watchlists/other/metadata")

    assert client.get("/watchlists").json == {"watchlists": ["demo", "other"]}


def test_bootstrap_app_uses_file_store(tmp_path) -> None:
    config = AppConfig(data_directory=tmp_path)

    app, registry = bootstrap_app(config)
    app.test_client().post("/watchlists/demo/items", json={"id": "a", "price": 1})

    store = JsonFileStore(tmp_path / "watchlists")
    assert store.list_keys() == ["watchlist-demo"]
    assert registry.ids() == ["demo"]


def test_bootstrap_http_backend_requires_url() -> None:
    config = AppConfig()
    config.storage.backend = "http"

    with pytest.raises(ValueError):
        bootstrap_app(config)


def test_reading_unknown_watchlist_does_not_create_it(web_app) -> None:
    app, registry, store = web_app
    client = app.test_client()

    assert client.get("/watchlists/unknown").status_code == 404
    assert client.get("/watchlists/unknown/items/a").status_code == 404
    assert registry.ids() == ["demo"]
    assert store.load("watchlist-unknown") is None


def test_add_item_rejects_non_numeric_price(web_app) -> None:
    app, registry, _ = web_app
    client = app.test_client()

    response = client.post("/watchlists/demo/items?quantity=3", json={"id": "b", "price": "10"})

    assert response.status_code == 400
    assert "price" in response.json["error"]
    assert registry.get("demo").in_watchlist("b") is False


def test_update_item_rejects_non_numeric_quantity(web_app) -> None:
    app, registry, _ = web_app
    client = app.test_client()

    response = client.patch("/watchlists/demo/items/a", json={"quantity": "2"})

    assert response.status_code == 400
    assert "quantity" in response.json["error"]
    assert registry.get("demo").get_item("a").quantity == 1
    assert client.patch("/watchlists/demo/items/a", json={"price": True}).status_code == 400


def test_set_items_rejects_non_numeric_fields(web_app) -> None:
    app, _, _ = web_app
    client = app.test_client()

    response = client.put("/watchlists/demo/items", json=[{"id": "x", "price": 1}, {"id": "y", "quantity": "3"}])

    assert response.status_code == 400
