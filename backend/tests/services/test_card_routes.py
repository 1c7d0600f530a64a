"""Card Routes — HTTP tests for owner-facing endpoints.

Tests cover:
    - POST /api/v1/cards creates (201) then updates (200)
    - Validation failures → 400 MISSING_REQUIRED_FIELD / VALIDATION_ERROR
    - Slug conflicts → 409 STORE_CONFLICT
    - GET current / by id / list, ownership scoping
    - DELETE → 204, then 404
    - POST /preview renders without touching the store
    - GET /api/v1/registry
"""

from uuid import uuid4

CARDS = "/api/v1/cards"


def _payload(**overrides):
    body = {
        "title": "Jane Doe",
        "username": "Jane_Doe!!",
        "profession": "Engineer",
        "whatsapp": "+1 (555) 123-4567",
        "shape": "circle",
        "layout": {"style": "creative", "alignment": "left", "font": "Poppins"},
        "links": [
            {"platform": "GitHub", "url": "https://github.com/jane", "username": "jane"},
            {"platform": "LinkedIn", "url": ""},
            {"platform": "Website", "url": "https://jane.dev", "is_active": False},
        ],
    }
    body.update(overrides)
    return body


async def _create(client, headers, **overrides):
    response = await client.post(CARDS, json=_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_card(client, owner_headers):
    data = await _create(client, owner_headers)
    assert data["id"] is not None
    assert data["username"] == "janedoe"
    assert data["shape"] == "circle"
    assert data["layout"] == {"style": "creative", "alignment": "left", "font": "Poppins"}
    assert data["theme"]["name"] == "Ocean Blue"
    assert data["can_save"] is True
    assert data["share_path"] is None
    # Blank-url links are dropped
    assert [link["platform"] for link in data["links"]] == ["GitHub", "Website"]
    assert data["links"][0]["icon"] == "github"
    assert data["links"][1]["is_active"] is False


async def test_update_card(client, owner_headers):
    created = await _create(client, owner_headers)
    body = _payload(id=created["id"], company="Acme", is_published=True, links=[])
    response = await client.post(CARDS, json=body, headers=owner_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["company"] == "Acme"
    assert data["links"] == []
    assert data["share_path"] == "/janedoe"
    assert data["share_url"] == "http://localhost:5173/janedoe"


async def test_missing_title_rejected(client, owner_headers):
    response = await client.post(CARDS, json=_payload(title="  "), headers=owner_headers)
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "MISSING_REQUIRED_FIELD"
    assert error["fields"] == ["title"]


async def test_missing_username_rejected(client, owner_headers):
    response = await client.post(CARDS, json=_payload(username="!!"), headers=owner_headers)
    assert response.status_code == 400
    assert response.json()["error"]["fields"] == ["username"]


async def test_invalid_shape_is_request_validation_error(client, owner_headers):
    response = await client.post(CARDS, json=_payload(shape="triangle"), headers=owner_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_owner_header_required(client):
    response = await client.post(CARDS, json=_payload())
    assert response.status_code == 400


async def test_duplicate_username_conflicts(client, owner_headers):
    await _create(client, owner_headers)
    response = await client.post(
        CARDS, json=_payload(title="Another"), headers={"X-Owner-Id": str(uuid4())},
    )
    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "STORE_CONFLICT"
    assert error["retryable"] is True


async def test_get_current_without_card_returns_seeded_blank(client, owner_headers):
    response = await client.get(f"{CARDS}/current", headers=owner_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] is None
    assert data["title"] == "Jane Doe"
    assert data["email"] == "jane@example.com"
    assert data["can_save"] is False


async def test_get_current_returns_saved_card(client, owner_headers):
    created = await _create(client, owner_headers)
    response = await client.get(f"{CARDS}/current", headers=owner_headers)
    assert response.json()["id"] == created["id"]


async def test_get_card_scoped_to_owner(client, owner_headers):
    created = await _create(client, owner_headers)
    ok = await client.get(f"{CARDS}/{created['id']}", headers=owner_headers)
    assert ok.status_code == 200
    assert ok.json()["links"][0]["url"] == "https://github.com/jane"

    other = await client.get(
        f"{CARDS}/{created['id']}", headers={"X-Owner-Id": str(uuid4())},
    )
    assert other.status_code == 404
    assert other.json()["error"]["code"] == "CARD_NOT_FOUND"


async def test_list_cards(client, owner_headers):
    await _create(client, owner_headers)
    response = await client.get(CARDS, headers=owner_headers)
    assert response.status_code == 200
    assert [c["username"] for c in response.json()["cards"]] == ["janedoe"]


async def test_delete_card(client, owner_headers):
    created = await _create(client, owner_headers)
    response = await client.delete(f"{CARDS}/{created['id']}", headers=owner_headers)
    assert response.status_code == 204
    again = await client.get(f"{CARDS}/{created['id']}", headers=owner_headers)
    assert again.status_code == 404


async def test_preview_compact(client):
    body = {"card": _payload()}
    response = await client.post(f"{CARDS}/preview", json=body)
    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "compact"
    tree = data["tree"]
    assert tree["kind"] == "preview"
    status_badge, card, info = tree["children"]
    assert status_badge["props"]["label"] == "Draft"
    assert card["props"]["shape"]["corner_radius"] == "full"
    assert card["props"]["alignment"] == {"align_items": "flex-start", "text_align": "left"}
    assert info["props"]["path"] == "/janedoe"


async def test_preview_full_with_reviews(client):
    body = {
        "card": _payload(),
        "mode": "full",
        "reviews": [{"reviewer_name": "Sam", "rating": 7, "comment": "Great"}],
    }
    response = await client.post(f"{CARDS}/preview", json=body)
    tree = response.json()["tree"]
    assert tree["kind"] == "card"
    assert tree["props"]["shape"]["corner_radius"] == "large"
    sections = {child["kind"]: child for child in tree["children"]}
    review = sections["reviews"]["children"][0]
    assert review["props"]["rating"] == 5
    contacts = sections["contacts"]["children"]
    assert contacts[0]["props"]["href"] == "https://wa.me/15551234567"


async def test_registry_catalog(client):
    response = await client.get("/api/v1/registry")
    assert response.status_code == 200
    data = response.json()
    assert data["theme_presets"][0]["name"] == "Ocean Blue"
    assert "Custom Link" in [p["name"] for p in data["social_platforms"]]
