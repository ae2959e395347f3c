from datetime import timedelta

from jose import jwt

from app.bizdash.middleware.auth_gate import is_protected_path


def test_dashboard_without_token_redirects_to_login(client):
    response = client.get("/dashboard", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"].startswith("/login")
    assert "callbackUrl=%2Fdashboard" in response.headers["location"]


def test_nested_dashboard_path_is_protected(client):
    response = client.get("/dashboard/sales", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"].startswith("/login")


def test_expired_token_redirects(client):
    from app.bizdash.core.security import create_access_token

    token = create_access_token({"sub": "owner@example.com"}, expires_delta=timedelta(minutes=-5))
    response = client.get(
        "/dashboard",
        headers={"Authorization": f"Bearer {token}"},
        follow_redirects=False,
    )

    assert response.status_code == 307


def test_token_signed_with_other_secret_redirects(client):
    token = jwt.encode({"sub": "intruder"}, "other-secret", algorithm="HS256")
    response = client.get(
        "/dashboard",
        headers={"Authorization": f"Bearer {token}"},
        follow_redirects=False,
    )

    assert response.status_code == 307


def test_valid_bearer_token_passes_through(client, session_token):
    response = client.get("/dashboard", headers={"Authorization": f"Bearer {session_token}"})

    assert response.status_code == 200
    assert response.json()["subject"] == "owner@example.com"


def test_valid_session_cookie_passes_through(client, session_token):
    from app.bizdash.core.config import settings

    client.cookies.set(settings.SESSION_COOKIE_NAME, session_token)
    response = client.get("/dashboard", follow_redirects=False)

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_redirect_follows_to_login_page(client):
    response = client.get("/dashboard")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "login_required"
    assert payload["callback_url"] == "/dashboard"


def test_verify_session_token_reasons(client):
    from app.bizdash.core.security import verify_session_token

    assert verify_session_token(None).reason == "missing_token"
    assert verify_session_token("not-a-jwt").reason == "invalid_token"


def test_is_protected_path_matches_prefix_boundaries():
    assert is_protected_path("/dashboard", ["/dashboard"])
    assert is_protected_path("/dashboard/menu", ["/dashboard/"])
    assert not is_protected_path("/dashboards", ["/dashboard"])
    assert not is_protected_path("/login", ["/dashboard"])
