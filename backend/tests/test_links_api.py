"""Tests for the dashboard link endpoints."""

from biolink.models import LinkClick


def test_links_require_session(client):
    response = client.get("/api/links")

    assert response.status_code == 401


def test_invalid_token_rejected(client):
    response = client.get("/api/links", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401


def test_create_link_appends_to_ungrouped(client, profile, auth_headers):
    first = client.post("/api/links", json={"url": "example.com", "title": "Site"}, headers=auth_headers)
    second = client.post("/api/links", json={"url": "https://example.org"}, headers=auth_headers)

    assert first.status_code == 201
    data = first.json()
    assert data["url"] == "https://example.com"
    assert data["title"] == "Site"
    assert data["position"] == 0
    assert data["collection_id"] is None
    assert data["click_count"] == 0

    assert second.json()["title"] == "Untitled"
    assert second.json()["position"] == 1


def test_create_link_in_collection_counts_only_that_bucket(
    client, profile, auth_headers, make_collection, make_link
):
    collection = make_collection("Music")
    make_link("Loose")
    make_link("Loose2")

    response = client.post(
        "/api/links",
        json={"url": "https://music.example", "title": "Album", "collection_id": collection.id},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json()["collection_id"] == collection.id
    assert response.json()["position"] == 0


def test_create_link_in_foreign_collection(client, profile, other_profile, auth_headers, make_collection):
    theirs = make_collection("Theirs", owner_id=other_profile.id)

    response = client.post(
        "/api/links",
        json={"url": "https://example.com", "collection_id": theirs.id},
        headers=auth_headers,
    )

    assert response.status_code == 404


def test_create_link_invalid_url(client, profile, auth_headers):
    response = client.post("/api/links", json={"url": "not a url"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter a valid URL"


def test_list_links_ordered(client, profile, auth_headers, make_link):
    make_link("Second", position=1)
    make_link("First", position=0)

    response = client.get("/api/links", headers=auth_headers)

    assert [link["title"] for link in response.json()] == ["First", "Second"]


def test_update_link(client, profile, auth_headers, make_link):
    link = make_link("Old")

    response = client.patch(
        f"/api/links/{link.id}",
        json={"title": "New", "url": "new.example.com", "is_active": False},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "New"
    assert data["url"] == "https://new.example.com"
    assert data["is_active"] is False
    assert data["position"] == link.position


def test_update_link_blank_title_becomes_untitled(client, profile, auth_headers, make_link):
    link = make_link("Old")

    response = client.patch(f"/api/links/{link.id}", json={"title": "  "}, headers=auth_headers)

    assert response.json()["title"] == "Untitled"


def test_update_link_rejects_bad_url(client, profile, auth_headers, make_link):
    link = make_link("Old")

    response = client.patch(f"/api/links/{link.id}", json={"url": "bad url"}, headers=auth_headers)

    assert response.status_code == 400


def test_foreign_link_is_not_found(client, profile, other_profile, auth_headers, make_link):
    theirs = make_link("Theirs", owner_id=other_profile.id)

    assert client.patch(f"/api/links/{theirs.id}", json={"title": "x"}, headers=auth_headers).status_code == 404
    assert client.delete(f"/api/links/{theirs.id}", headers=auth_headers).status_code == 404


def test_delete_link(client, store, profile, auth_headers, make_link):
    link = make_link("Gone")

    response = client.delete(f"/api/links/{link.id}", headers=auth_headers)

    assert response.status_code == 200
    assert store.get_link(link.id) is None


def test_delete_link_removes_clicks(client, store, db_session, profile, auth_headers, make_link):
    link = make_link("Gone")
    store.increment_link_clicks(link.id, "1.2.3.4", "", "")

    client.delete(f"/api/links/{link.id}", headers=auth_headers)

    assert db_session.query(LinkClick).count() == 0


def test_link_click_history(client, store, profile, auth_headers, make_link):
    link = make_link("Popular")
    for ip in ("198.51.100.1", "198.51.100.2", "198.51.100.3"):
        store.increment_link_clicks(link.id, ip, "agent", "")

    response = client.get(f"/api/links/{link.id}/clicks?limit=2", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["click_count"] == 3
    assert data["total"] == 3
    assert len(data["clicks"]) == 2
    assert data["clicks"][0]["ip_address"] == "198.51.100.3"


def test_me_creates_profile_on_first_visit(client, auth_headers):
    response = client.get("/api/me", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "tester"
    assert data["theme"] == "default"
    assert data["is_public"] is True


def test_me_returns_existing_profile(client, profile, auth_headers):
    response = client.get("/api/me", headers=auth_headers)

    assert response.json()["display_name"] == "Test User"
