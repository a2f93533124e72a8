from dataclasses import replace

from fastapi.testclient import TestClient

from feedshift.server.main import app
from feedshift.server.routers import api as api_routes
from tests.helpers._feed_builders import build_item, build_shop, build_variation_item, valid_entry

client = TestClient(app)


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["app"]


def test_list_fields() -> None:
    response = client.get("/api/v1/fields")
    assert response.status_code == 200
    body = response.json()
    assert len(body["fields"]) == 70
    assert body["categories"][0] == {"key": "flags", "label": "Feed Flags", "order": 1}


def test_list_fields_by_category() -> None:
    response = client.get("/api/v1/fields", params={"category": "media"})
    assert response.status_code == 200
    assert [field["attribute"] for field in response.json()["fields"]] == [
        "image_link",
        "additional_image_link",
        "video_link",
        "model_3d_link",
    ]


def test_list_fields_rejects_unknown_category() -> None:
    response = client.get("/api/v1/fields", params={"category": "toys"})
    assert response.status_code == 422


def test_field_detail() -> None:
    response = client.get("/api/v1/fields/title")
    assert response.status_code == 200
    assert response.json()["locked"] is True

    missing = client.get("/api/v1/fields/colour")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Unknown feed attribute: colour"


def test_resolve_endpoint() -> None:
    response = client.post(
        "/api/v1/resolve",
        json={
            "item": build_item(),
            "shop": build_shop().to_dict(),
            "overrides": {"material": {"type": "static", "value": "Leather"}},
            "flags": {"enable_search": True, "enable_checkout": False},
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["resolved"]["price"] == "79.99 USD"
    assert body["resolved"]["material"] == "Leather"
    assert body["sources"]["material"] == "static"
    assert body["validation"]["isValid"] is True
    assert body["eligible"] is True


def test_resolve_endpoint_reports_missing_required_values() -> None:
    response = client.post(
        "/api/v1/resolve",
        json={"item": build_variation_item(), "shop": build_shop().to_dict()},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["validation"]["errors"]["material"] == ["material is required"]
    assert body["eligible"] is False


def test_resolve_endpoint_rejects_bad_overrides() -> None:
    response = client.post(
        "/api/v1/resolve",
        json={"item": build_item(), "overrides": {"material": {"type": "formula"}}},
    )
    assert response.status_code == 422
    assert "unsupported type" in response.json()["detail"]


def test_resolve_endpoint_rejects_literal_overrides_the_feed_would_fail() -> None:
    response = client.post(
        "/api/v1/resolve",
        json={
            "item": build_item(),
            "overrides": {
                "material": {"type": "static", "value": "Leather"},
                "popularity_score": {"type": "static", "value": "nan"},
            },
        },
    )

    assert response.status_code == 422
    assert response.json()["detail"] == {"overrides": {"popularity_score": "Must be a valid number"}}


def test_resolve_endpoint_literal_check_can_be_disabled(monkeypatch) -> None:
    monkeypatch.setattr(api_routes, "settings", replace(api_routes.settings, check_literal_overrides=False))

    response = client.post(
        "/api/v1/resolve",
        json={"item": build_item(), "overrides": {"popularity_score": {"type": "static", "value": "nan"}}},
    )

    assert response.status_code == 200
    assert response.json()["validation"]["errors"]["popularity_score"] == ["popularity_score must be a valid number"]


def test_resolve_endpoint_rejects_shop_without_id() -> None:
    response = client.post("/api/v1/resolve", json={"item": build_item(), "shop": {"shop_name": "x"}})
    assert response.status_code == 422


def test_validate_endpoint() -> None:
    response = client.post("/api/v1/validate", json={"entry": {"price": "50.00 USD", "sale_price": "60.00 USD"}})
    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is False
    assert any(issue["code"] == "sale_price_exceeds_price" for issue in body["errors"])
    assert "sale_price" in body["grouped"]["errors"]


def test_validate_endpoint_uses_item_context() -> None:
    entry = valid_entry(item_group_id=None)

    simple = client.post("/api/v1/validate", json={"entry": entry, "item": build_item()})
    variant = client.post("/api/v1/validate", json={"entry": entry, "item": build_variation_item()})

    assert simple.json()["valid"] is True
    assert variant.json()["valid"] is False


def test_validate_literal_endpoint() -> None:
    ok = client.post("/api/v1/validate/literal", json={"attribute": "price", "value": "19.99 USD"})
    assert ok.status_code == 200
    assert ok.json() == {"isValid": True}

    bad = client.post("/api/v1/validate/literal", json={"attribute": "price", "value": "-5.00 USD"})
    assert bad.json()["isValid"] is False

    unknown = client.post("/api/v1/validate/literal", json={"attribute": "colour", "value": "Blue"})
    assert unknown.status_code == 404
