import json


def test_list_contacts_defaults(client):
    response = client.get("/contacts")

    assert response.status_code == 200
    payload = response.json()
    assert payload["filters"] == {
        "q": "",
        "favorite": False,
        "category": "all",
        "sort": "last",
        "tag": "",
    }
    assert [c["last"] for c in payload["contacts"]] == ["Le", "Nguyen", "Nguyen", "Phan", "Vo", "Vo"]
    assert "createdAt" in payload["contacts"][0]


def test_list_contacts_with_query_params(client):
    response = client.get(
        "/contacts", params={"favorite": "true", "category": "vip", "sort": "recent"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert [c["id"] for c in payload["contacts"]] == ["seed-ella-vo"]
    assert payload["filters"]["favorite"] is True


def test_favorite_param_only_enables_on_true(client):
    response = client.get("/contacts", params={"favorite": "1"})

    assert len(response.json()["contacts"]) == 6


def test_tag_param_filters(client):
    response = client.get("/contacts", params={"tag": "REACT"})

    assert [c["id"] for c in response.json()["contacts"]] == ["seed-minh-vo"]


def test_create_get_update_delete_flow(client):
    created = client.post("/contacts")
    assert created.status_code == 201
    contact_id = created.json()["id"]
    assert created.json()["category"] == "uncategorized"

    fetched = client.get(f"/contacts/{contact_id}")
    assert fetched.status_code == 200
    assert fetched.json() == created.json()

    updated = client.patch(
        f"/contacts/{contact_id}",
        json={"first": "Mai", "favorite": "true", "tags": "family, school", "category": "all"},
    )
    assert updated.status_code == 200
    body = updated.json()
    assert body["first"] == "Mai"
    assert body["favorite"] is True
    assert body["tags"] == ["family", "school"]
    assert body["category"] == "uncategorized"

    deleted = client.delete(f"/contacts/{contact_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"deleted": True, "contact_id": contact_id}

    assert client.get(f"/contacts/{contact_id}").status_code == 404


def test_patch_numeric_favorite_is_not_truthy(client):
    response = client.patch("/contacts/seed-ava-nguyen", json={"favorite": 1})

    assert response.status_code == 200
    assert response.json()["favorite"] is False


def test_unknown_contact_returns_404(client):
    assert client.get("/contacts/missing-id").status_code == 404
    assert client.patch("/contacts/missing-id", json={"favorite": True}).status_code == 404
    assert client.delete("/contacts/missing-id").status_code == 404


def test_stats_endpoint(client):
    response = client.get("/contacts/stats")

    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 6
    assert payload["favorites"] == 3
    assert len(payload["top_categories"]) == 3


def test_categories_endpoint(client):
    payload = client.get("/contacts/categories").json()

    assert payload["categories"][0] == {"value": "work", "label": "Work"}
    assert payload["categories"][-1]["value"] == "uncategorized"
    assert [o["value"] for o in payload["sort_options"]] == [
        "last",
        "first",
        "company",
        "recent",
        "favorite",
    ]


def test_export_endpoint(client):
    response = client.get("/contacts/export")

    assert response.status_code == 200
    assert "contacts-export.json" in response.headers["content-disposition"]
    exported = json.loads(response.text)
    assert len(exported) == 6
    assert exported[0]["id"] == "seed-ava-nguyen"
    assert exported[0]["twitterHandle"] == "ava_codes"


def test_request_id_header(client):
    response = client.get("/contacts", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_unreadable_storage_returns_500(client, fake_redis):
    fake_redis.store["contacts"] = "{broken"

    response = client.get("/contacts")

    assert response.status_code == 500
    assert response.json()["detail"] == "Contact storage is unreadable"
