"""Tests for click tracking."""

from biolink.core.clicks import ClickRecorder
from biolink.models import LinkClick
from biolink.store import SqlStore, StoreError


class BrokenStore(SqlStore):
    def increment_link_clicks(self, link_uuid, ip_addr, user_agent_str, referrer_str):
        raise StoreError("connection reset")


def test_track_click_increments_once(client, store, db_session, make_link):
    link = make_link("Blog")

    response = client.post(
        "/api/track-click",
        json={"linkId": link.id},
        headers={
            "X-Forwarded-For": "203.0.113.7, 10.0.0.1",
            "User-Agent": "Mozilla/5.0",
            "Referer": "https://social.example/post",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert store.get_link(link.id).click_count == 1

    clicks = db_session.query(LinkClick).filter(LinkClick.link_id == link.id).all()
    assert len(clicks) == 1
    assert clicks[0].ip_address == "203.0.113.7"
    assert clicks[0].user_agent == "Mozilla/5.0"
    assert clicks[0].referrer == "https://social.example/post"


def test_track_click_twice(client, store, make_link):
    link = make_link("Blog")

    client.post("/api/track-click", json={"linkId": link.id})
    client.post("/api/track-click", json={"linkId": link.id})

    assert store.get_link(link.id).click_count == 2


def test_track_click_metadata_defaults(client, db_session, make_link):
    link = make_link("Blog")

    client.post("/api/track-click", json={"linkId": link.id}, headers={"User-Agent": ""})

    click = db_session.query(LinkClick).one()
    assert click.ip_address
    assert click.referrer == ""


def test_track_click_unknown_link(client, store, db_session, make_link):
    link = make_link("Blog")

    response = client.post("/api/track-click", json={"linkId": "does-not-exist"})

    assert response.status_code == 404
    assert "error" in response.json()
    assert db_session.query(LinkClick).count() == 0
    assert store.get_link(link.id).click_count == 0


def test_track_click_requires_link_id(client):
    response = client.post("/api/track-click", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Link ID is required"}


def test_track_click_invalid_json(client):
    response = client.post(
        "/api/track-click",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_track_click_numeric_link_id(client, db_session):
    response = client.post("/api/track-click", json={"linkId": 42})

    assert response.status_code == 404
    assert response.json() == {"error": "Link not found"}
    assert db_session.query(LinkClick).count() == 0


def test_recorder_records(store, make_link):
    link = make_link("Blog")

    result = ClickRecorder(store).record(link.id, "198.51.100.2", "curl/8", "")

    assert result.recorded
    assert store.get_link(link.id).click_count == 1


def test_recorder_swallows_store_failures(db_session, make_link, caplog):
    link = make_link("Blog")

    result = ClickRecorder(BrokenStore(db_session)).record(link.id)

    assert not result.recorded
    assert not result.not_found
    assert "connection reset" in result.error
    assert "Error tracking click" in caplog.text


def test_recorder_unknown_link(store):
    result = ClickRecorder(store).record("nope")

    assert not result.recorded
    assert result.not_found
