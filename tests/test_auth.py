from arogyamix.services.auth_events import AuthEvent, auth_events
from conftest import TEST_PASSWORD


def _sign_up(client, **overrides):
    body = {"email": "asha@example.com", "password": TEST_PASSWORD, "full_name": "Asha Rao"}
    body.update(overrides)
    return client.post("/auth/signup", json=body)


def test_sign_up_creates_account(client):
    response = _sign_up(client, email="Asha@Example.com")

    assert response.status_code == 201
    payload = response.json()["data"]
    assert payload["email"] == "asha@example.com"
    assert payload["full_name"] == "Asha Rao"
    assert "password_hash" not in payload


def test_sign_up_rejects_duplicate_email(client):
    _sign_up(client)
    response = _sign_up(client)

    assert response.status_code == 409
    assert response.json()["message"] == "This email is already registered. Please sign in instead."


def test_sign_up_validation_error_is_reported(client):
    response = _sign_up(client, password="weakpass")

    assert response.status_code == 400
    assert response.json()["message"] == "Password must contain at least one uppercase letter"


def test_sign_in_with_wrong_password(client):
    _sign_up(client)
    response = client.post("/auth/signin", json={"email": "asha@example.com", "password": "Wr0ngPassword"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_session_and_logout_flow(client):
    events = []
    unsubscribe = auth_events.subscribe(lambda event, payload: events.append(event))
    try:
        _sign_up(client)
        signin = client.post("/auth/signin", json={"email": "asha@example.com", "password": TEST_PASSWORD})
        assert signin.status_code == 200
        headers = {"Authorization": f"Bearer {signin.json()['data']['access_token']}"}

        session = client.get("/auth/session", headers=headers)
        assert session.status_code == 200
        assert session.json()["data"]["user"]["email"] == "asha@example.com"

        assert client.post("/auth/logout", headers=headers).status_code == 200

        after = client.get("/auth/session", headers=headers)
        assert after.status_code == 401
        assert after.json()["message"] == "Session expired or logged out"
        assert after.json()["status"] == "error"
    finally:
        unsubscribe()

    assert events == [AuthEvent.signed_up, AuthEvent.signed_in, AuthEvent.signed_out]


def test_garbage_token_is_rejected(client):
    response = client.get("/auth/session", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    payload = response.json()
    assert payload["message"] == "Invalid or expired token"
    assert payload["status"] == "error"
    assert payload["status_code"] == 401
    assert payload["data"] is None


def test_missing_bearer_uses_response_envelope(client):
    response = client.get("/appointments")
    assert response.status_code in (401, 403)
    payload = response.json()
    assert "detail" not in payload
    assert payload["status"] == "error"
    assert payload["status_code"] == response.status_code
    assert payload["message"]


def test_unknown_route_uses_response_envelope(client):
    response = client.get("/no-such-route")
    assert response.status_code == 404
    assert response.json()["status"] == "error"
