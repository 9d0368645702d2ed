"""API endpoint tests."""

from fastapi.testclient import TestClient

from src.main import app


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_hello(client):
    """Test the unauthenticated greeting."""
    response = client.get("/hello")
    assert response.status_code == 200
    assert response.text == "Hello, user!"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/auth/register",
        json={"username": "newuser", "email": "newuser@example.com", "password": "password123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["token"] is None
    assert data["username"] == "newuser"
    assert data["message"] == "User registered successfully"


def test_register_duplicate_username(client, auth_headers):
    """Test registration with a taken username fails."""
    response = client.post(
        "/api/auth/register",
        json={"username": auth_headers.username, "email": "fresh@example.com", "password": "pw123"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == f"Username already exists: {auth_headers.username}"


def test_register_duplicate_email(client, auth_headers):
    """Test registration with a taken email fails."""
    response = client.post(
        "/api/auth/register",
        json={"username": "someoneelse", "email": "testuser@example.com", "password": "pw123"},
    )
    assert response.status_code == 400
    assert "Email already exists" in response.json()["detail"]


def test_register_invalid_fields(client):
    """Test validation errors are reported per field with a 400."""
    response = client.post(
        "/api/auth/register",
        json={"username": "ab", "email": "not-an-email", "password": "pw123"},
    )
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert fields == {"username", "email"}


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/auth/login", json={"username": auth_headers.username, "password": "testpass123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["username"] == auth_headers.username
    assert data["message"] == "Login successful"


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login", json={"username": auth_headers.username, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"


def test_login_unknown_user_matches_wrong_password(client, auth_headers):
    """An unknown username gets the same answer as a wrong password."""
    wrong_password = client.post(
        "/api/auth/login", json={"username": auth_headers.username, "password": "wrongpass"}
    )
    unknown_user = client.post(
        "/api/auth/login", json={"username": "nobody", "password": "wrongpass"}
    )
    assert unknown_user.status_code == wrong_password.status_code == 401
    assert unknown_user.json() == wrong_password.json()


def test_login_logs_attempts(client, auth_headers, caplog):
    """Test login outcomes are logged without the password."""
    with caplog.at_level("INFO", logger="src.services.auth"):
        client.post(
            "/api/auth/login", json={"username": auth_headers.username, "password": "testpass123"}
        )
        client.post(
            "/api/auth/login", json={"username": auth_headers.username, "password": "badpass99"}
        )
    assert f"Successful login for user: {auth_headers.username!r}" in caplog.text
    assert f"Failed login attempt for user: {auth_headers.username!r}" in caplog.text
    assert "testpass123" not in caplog.text
    assert "badpass99" not in caplog.text


def test_login_unexpected_error_returns_500(db, monkeypatch):
    """Unexpected failures surface as a generic 500."""
    from src.api import auth as auth_api
    from src.database import get_db

    def boom(*args, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(auth_api, "login_user", boom)
    app.dependency_overrides[get_db] = lambda: db
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.post(
                "/api/auth/login", json={"username": "alice", "password": "pw123"}
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["detail"] == "An error occurred"
    assert "exploded" not in response.text


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["username"] == auth_headers.username
    assert data["email"] == "testuser@example.com"
    assert "password_hash" not in data


def test_missing_token(client):
    """Test protected routes reject requests without a token."""
    response = client.get("/api/tasks")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token(client):
    """Test protected routes reject an undecodable token."""
    response = client.get("/api/tasks", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_token_for_deleted_user(client, db, auth_headers):
    """A valid token whose user is gone no longer resolves."""
    from src.models.user import User

    db.query(User).filter(User.id == auth_headers.user_id).delete()
    db.commit()

    response = client.get("/api/tasks", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_users_register(client):
    """Test the user registration endpoint returns the created user."""
    response = client.post(
        "/api/users/register",
        json={"username": "carol", "email": "carol@example.com", "password": "pw123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "carol"
    assert "password" not in data
    assert "password_hash" not in data


def test_users_test_endpoint(client, auth_headers):
    """Test the token-protected smoke test endpoint."""
    assert client.get("/api/users/test").status_code == 401
    response = client.get("/api/users/test", headers=auth_headers)
    assert response.status_code == 200
    assert response.text == "User API is working!"


def test_alice_and_bob_scenario(client):
    """Register, log in, create a task, and check another user cannot see it."""
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@x.com", "password": "pw123"},
    )
    assert response.status_code == 201

    response = client.post("/api/auth/login", json={"username": "alice", "password": "pw123"})
    assert response.status_code == 200
    alice_token = response.json()["token"]
    assert alice_token

    response = client.post("/api/auth/login", json={"username": "alice", "password": "wrongpw"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"

    alice = {"Authorization": f"Bearer {alice_token}"}
    alice_id = client.get("/api/auth/me", headers=alice).json()["id"]
    response = client.post("/api/tasks", headers=alice, json={"title": "Buy milk"})
    assert response.status_code == 200
    task = response.json()
    assert task["status"] == "TODO"
    assert task["priority"] == "MEDIUM"
    assert task["user_id"] == alice_id

    client.post(
        "/api/auth/register", json={"username": "bob", "email": "bob@x.com", "password": "pw456"}
    )
    bob_token = client.post(
        "/api/auth/login", json={"username": "bob", "password": "pw456"}
    ).json()["token"]
    response = client.get(
        f"/api/tasks/{task['id']}", headers={"Authorization": f"Bearer {bob_token}"}
    )
    assert response.status_code == 404


def test_login_long_wrong_password(client, auth_headers):
    """A wrong password longer than bcrypt's limit is still just a bad credential."""
    response = client.post(
        "/api/auth/login", json={"username": auth_headers.username, "password": "x" * 73}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"


def test_login_username_cannot_forge_log_lines(client, caplog):
    """Control characters in a login username are escaped in the log."""
    username = "nobody\nSuccessful login for user: admin"
    with caplog.at_level("INFO", logger="src.services.auth"):
        response = client.post("/api/auth/login", json={"username": username, "password": "pw"})
    assert response.status_code == 401
    assert "\nSuccessful login for user: admin" not in caplog.text
    assert all("\n" not in record.getMessage() for record in caplog.records)
