"""Public Routes — published card page and vCard download."""

CARDS = "/api/v1/cards"


async def _publish(client, headers, published=True):
    body = {
        "title": "Jane Doe",
        "username": "jane",
        "company": "Acme",
        "phone": "+1 555 0100",
        "is_published": published,
        "links": [{"platform": "GitHub", "url": "https://github.com/jane"}],
    }
    response = await client.post(CARDS, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_public_card_by_slug(client, owner_headers):
    created = await _publish(client, owner_headers)
    response = await client.get("/api/v1/public/jane")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["vcard_path"] == "/api/v1/public/jane/vcf"
    tree = data["tree"]
    assert tree["kind"] == "card"
    assert tree["props"]["mode"] == "full"
    social = next(c for c in tree["children"] if c["kind"] == "social_links")
    assert social["children"][0]["props"]["href"] == "https://github.com/jane"


async def test_public_card_by_id(client, owner_headers):
    created = await _publish(client, owner_headers)
    response = await client.get(f"/c/{created['id']}")
    assert response.status_code == 200
    assert response.json()["slug"] == "jane"


async def test_unpublished_card_is_not_found(client, owner_headers):
    created = await _publish(client, owner_headers, published=False)
    assert (await client.get("/api/v1/public/jane")).status_code == 404
    assert (await client.get(f"/c/{created['id']}")).status_code == 404


async def test_vcard_download(client, owner_headers):
    await _publish(client, owner_headers)
    response = await client.get("/api/v1/public/jane/vcf")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/vcard")
    assert "jane.vcf" in response.headers["content-disposition"]
    assert "FN:Jane Doe" in response.text
    assert "ORG:Acme" in response.text
