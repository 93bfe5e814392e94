"""Tests for the HTML pages."""


def test_public_profile(client, store, profile, make_collection, make_link):
    collection = make_collection("Social")
    make_link("Twitter", collection)
    make_link("Blog")
    make_link("Secret", is_active=False)
    make_collection("Empty")

    response = client.get("/tester")

    assert response.status_code == 200
    html = response.text
    assert "<title>Test User - Biolink</title>" in html
    assert 'content="Links I like"' in html
    assert "Social" in html
    assert "Twitter" in html
    assert "Blog" in html
    assert "Secret" not in html
    assert "Empty" not in html
    assert "/api/track-click" in html
    assert 'target="_blank"' in html


def test_public_profile_orders_links(client, profile, make_link):
    make_link("Zeta", position=1)
    make_link("Alpha", position=0)

    html = client.get("/tester").text

    assert html.index("Alpha") < html.index("Zeta")


def test_public_profile_escapes_content(client, store, profile, make_link):
    store.update_link(make_link("Plain").id, title="<script>alert(1)</script>")

    html = client.get("/tester").text

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html


def test_public_profile_uses_theme(client, store, profile):
    store.create_profile(id="dark-user", username="nightowl", theme="dark", is_public=True)

    html = client.get("/nightowl").text

    assert "#1a1a1a" in html
    assert "<title>nightowl - Biolink</title>" in html
    assert "Check out nightowl&#x27;s links" in html


def test_private_profile_not_found(client, store):
    store.create_profile(id="hidden-user", username="hidden", is_public=False)

    response = client.get("/hidden")

    assert response.status_code == 404
    assert "Profile Not Found" in response.text


def test_unknown_profile_not_found(client, db_session):
    response = client.get("/nobody")

    assert response.status_code == 404


def test_dashboard_redirects_without_session(client, db_session):
    response = client.get("/dashboard", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/auth"


def test_dashboard_with_cookie_session(client, profile, auth_token, make_collection, make_link):
    make_link("Loose")
    make_link("Inside", make_collection("Social"))
    client.cookies.set("access_token", auth_token)

    response = client.get("/dashboard")

    assert response.status_code == 200
    assert "Loose" in response.text
    assert "Inside" in response.text
    assert "1 links" in response.text


def test_auth_page(client, db_session):
    response = client.get("/auth")

    assert response.status_code == 200
    assert "Sign in" in response.text


def test_health(client, db_session):
    response = client.get("/health")

    assert response.json() == {"status": "healthy", "service": "Biolink"}
    assert "X-Request-ID" in response.headers


def test_public_profile_lookup_is_exact(client, store):
    store.create_profile(id="upper-user", username="Bob", is_public=True)
    store.create_profile(id="lower-user", username="bob", display_name="Lower Bob", is_public=True)

    assert "<title>Lower Bob - Biolink</title>" in client.get("/bob").text
    assert "<title>Bob - Biolink</title>" in client.get("/Bob").text
    assert client.get("/BOB").status_code == 404
