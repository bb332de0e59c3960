"""Tests for the HTTP API."""

from helpers import FakeSquarespace, fake_vision, make_product

from alttext.api.dependencies import get_apply_service
from alttext.main import app
from alttext.models.alt_text import AltTextRecord
from alttext.models.enums import AltTextStatus
from alttext.services.apply_service import ApplyService
from alttext.services.errors import GenerationError
from alttext.services.session import create_session_token
from alttext.services.vision import get_vision_service


def _item(i: int) -> dict:
    return {
        "product_id": "prod-1",
        "product_name": "Trail Runner",
        "image_id": f"img-{i}",
        "image_url": f"https://cdn.example.com/img-{i}.jpg",
        "tags": "shoes, running",
    }


def _use_vision(vision):
    app.dependency_overrides[get_vision_service] = lambda: vision


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_requires_session(client):
    assert client.get("/api/v1/store").status_code in (401, 403)

    response = client.get("/api/v1/store", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_unknown_store(client):
    token = create_session_token(99999, "gone")
    response = client.get("/api/v1/store", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 404


def test_generate(client, db, store, auth_headers):
    vision = fake_vision(
        responses={"https://cdn.example.com/img-1.jpg": GenerationError("rate limited")}
    )
    _use_vision(vision)

    response = client.post(
        "/api/v1/generate", json={"items": [_item(0), _item(1), _item(2)]}, headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["success_count"] == 2
    assert data["message"] == "Successfully generated 2 alt texts."
    assert data["errors"] == [
        {"product_id": "prod-1", "image_id": "img-1", "error": "rate limited"}
    ]
    context = vision.generate_alt_text.await_args_list[0].args[1]
    assert context.tags == ["shoes", "running"]

    db.refresh(store)
    assert (store.credits_remaining, store.credits_used) == (8, 2)


def test_generate_insufficient_credits(client, db, make_store):
    store = make_store("site-poor", credits_remaining=3)
    headers = {"Authorization": f"Bearer {create_session_token(store.id, store.site_id)}"}
    vision = fake_vision()
    _use_vision(vision)

    response = client.post(
        "/api/v1/generate", json={"items": [_item(i) for i in range(5)]}, headers=headers
    )

    assert response.status_code == 402
    detail = response.json()["detail"]
    assert detail["required"] == 5
    assert detail["available"] == 3
    assert detail["message"] == "Not enough credits. Need 5, have 3."
    vision.generate_alt_text.assert_not_called()


def test_generate_no_items(client, auth_headers):
    _use_vision(fake_vision())

    response = client.post("/api/v1/generate", json={"items": []}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "No items provided"


def test_apply_and_edit(client, db, store, auth_headers):
    db.add(
        AltTextRecord(
            store_id=store.id,
            product_id="prod-1",
            image_id="img-0",
            generated_alt_text="A red shoe",
            final_alt_text="A red shoe",
            status=AltTextStatus.GENERATED.value,
        )
    )
    db.commit()
    squarespace = FakeSquarespace([make_product(image_alts=[None])])
    app.dependency_overrides[get_apply_service] = lambda: ApplyService(db, squarespace=squarespace)

    response = client.patch(
        "/api/v1/apply",
        json={"product_id": "prod-1", "image_id": "img-0", "alt_text": "A crimson sneaker"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "updated": True}

    response = client.post(
        "/api/v1/apply",
        json={"items": [{"product_id": "prod-1", "image_id": "img-0"}]},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["applied_count"] == 1
    assert data["errors"] == []
    assert data["message"] == "Applied 1 alt texts to Squarespace."
    assert squarespace.updates == [("prod-1", "img-0", "A crimson sneaker")]

    db.refresh(store)
    assert (store.credits_remaining, store.credits_used) == (10, 0)


def test_edit_unknown_image(client, auth_headers):
    response = client.patch(
        "/api/v1/apply",
        json={"product_id": "prod-1", "image_id": "img-9", "alt_text": "Text"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["updated"] is False


def test_edit_rejects_empty_text(client, auth_headers):
    response = client.patch(
        "/api/v1/apply",
        json={"product_id": "prod-1", "image_id": "img-0", "alt_text": ""},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_apply_no_items(client, db, auth_headers):
    app.dependency_overrides[get_apply_service] = lambda: ApplyService(
        db, squarespace=FakeSquarespace()
    )

    response = client.post("/api/v1/apply", json={"items": []}, headers=auth_headers)

    assert response.status_code == 400


def test_settings_round_trip(client, auth_headers):
    response = client.get("/api/v1/settings", headers=auth_headers)
    assert response.json() == {
        "alt_text_style": "balanced",
        "default_language": "en",
        "auto_process": False,
    }

    response = client.post(
        "/api/v1/settings",
        json={"alt_text_style": "detailed", "default_language": "de", "auto_process": True},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json() == {
        "alt_text_style": "detailed",
        "default_language": "de",
        "auto_process": True,
    }


def test_settings_fall_back_for_unknown_values(client, auth_headers):
    response = client.post(
        "/api/v1/settings",
        json={"alt_text_style": "poetic", "default_language": "tlh", "auto_process": True},
        headers=auth_headers,
    )

    assert response.json()["alt_text_style"] == "balanced"
    assert response.json()["default_language"] == "en"


def test_store_summary(client, db, store, auth_headers):
    for image_id, status in (("img-0", "GENERATED"), ("img-1", "APPLIED")):
        db.add(
            AltTextRecord(
                store_id=store.id,
                product_id="prod-1",
                image_id=image_id,
                final_alt_text="A red shoe",
                status=status,
            )
        )
    db.commit()

    response = client.get("/api/v1/store", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["site_id"] == "site-1"
    assert data["plan"] == "FREE"
    assert data["total_credits"] == 100
    assert data["credits_remaining"] == 10
    assert data["total_generated"] == 2
    assert data["total_applied"] == 1
