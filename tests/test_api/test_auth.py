"""Tests for authentication API endpoints."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from open_music.database import get_db
from open_music.main import app
from open_music.models.user import User
from open_music.utils.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

USER_ID = "user-DhYq9nKdnUhIXdKx"

REGISTER_PAYLOAD = {
    "username": "newuser",
    "email": "newuser@example.com",
    "password": "securepassword123",
    "fullname": "New User",
}


@pytest.fixture
def mock_db_session():
    """Create a mock database session and install it as the get_db dependency."""
    mock_session = AsyncMock()
    mock_session.add = MagicMock()
    mock_session.flush = AsyncMock()
    mock_session.refresh = AsyncMock()

    async def override_get_db():
        yield mock_session

    app.dependency_overrides[get_db] = override_get_db
    yield mock_session
    app.dependency_overrides.clear()


def create_mock_user(
    id: str = USER_ID,
    username: str = "testuser",
    email: str = "test@example.com",
    password: str = "securepassword123",
    is_active: bool = True,
) -> MagicMock:
    """Create a mock User object."""
    mock_user = MagicMock(spec=User)
    mock_user.id = id
    mock_user.username = username
    mock_user.email = email
    mock_user.fullname = "Test User"
    mock_user.hashed_password = hash_password(password)
    mock_user.is_active = is_active
    mock_user.created_at = datetime(2025, 1, 1, 12, 0, 0)
    return mock_user


def lookup_result(user: MagicMock | None) -> MagicMock:
    """Create a query result whose scalar_one_or_none returns the given user."""
    # Result is sync, not async
    result = MagicMock()
    result.scalar_one_or_none.return_value = user
    return result


class TestRegister:
    """Tests for user registration endpoint."""

    async def test_register_success(self, client: AsyncClient, mock_db_session: AsyncMock) -> None:
        """Test successful user registration."""
        mock_db_session.execute = AsyncMock(side_effect=[lookup_result(None), lookup_result(None)])

        response = await client.post("/api/auth/register", json=REGISTER_PAYLOAD)

        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("user-")
        assert data["username"] == "newuser"
        assert data["email"] == "newuser@example.com"
        assert data["fullname"] == "New User"
        assert data["is_active"] is True
        assert "password" not in data
        assert "hashed_password" not in data

        stored_user = mock_db_session.add.call_args.args[0]
        assert verify_password("securepassword123", stored_user.hashed_password)

    async def test_register_username_already_exists(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        """Test registration with existing username."""
        mock_db_session.execute = AsyncMock(return_value=lookup_result(create_mock_user()))

        response = await client.post("/api/auth/register", json=REGISTER_PAYLOAD)

        assert response.status_code == 409
        assert "Username already registered" in response.json()["detail"]

    async def test_register_email_already_exists(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        """Test registration with existing email."""
        mock_db_session.execute = AsyncMock(
            side_effect=[lookup_result(None), lookup_result(create_mock_user())]
        )

        response = await client.post("/api/auth/register", json=REGISTER_PAYLOAD)

        assert response.status_code == 409
        assert "Email already registered" in response.json()["detail"]

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("email", "not-an-email"),
            ("password", "short"),
            ("username", "ab"),
            ("username", "user@name"),
            ("fullname", ""),
        ],
    )
    async def test_register_invalid_payload(
        self, client: AsyncClient, mock_db_session: AsyncMock, field: str, value: str
    ) -> None:
        """Test registration payload validation."""
        response = await client.post("/api/auth/register", json={**REGISTER_PAYLOAD, field: value})

        assert response.status_code == 422

    async def test_register_username_normalized_to_lowercase(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        """Test that username is normalized to lowercase."""
        mock_db_session.execute = AsyncMock(side_effect=[lookup_result(None), lookup_result(None)])

        response = await client.post(
            "/api/auth/register", json={**REGISTER_PAYLOAD, "username": "NewUser"}
        )

        assert response.status_code == 201
        assert response.json()["username"] == "newuser"


class TestLogin:
    """Tests for user login endpoint."""

    async def test_login_success(self, client: AsyncClient, mock_db_session: AsyncMock) -> None:
        """Test successful login returns a token for the user."""
        mock_db_session.execute = AsyncMock(return_value=lookup_result(create_mock_user()))

        response = await client.post(
            "/api/auth/login", json={"username": "testuser", "password": "securepassword123"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        payload = decode_access_token(data["access_token"])
        assert payload is not None
        assert payload["sub"] == USER_ID

    async def test_login_invalid_password(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        """Test login with incorrect password."""
        mock_db_session.execute = AsyncMock(return_value=lookup_result(create_mock_user()))

        response = await client.post(
            "/api/auth/login", json={"username": "testuser", "password": "wrongpassword"}
        )

        assert response.status_code == 401
        assert "Invalid username or password" in response.json()["detail"]

    async def test_login_user_not_found(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        """Test login with non-existent user."""
        mock_db_session.execute = AsyncMock(return_value=lookup_result(None))

        response = await client.post(
            "/api/auth/login", json={"username": "nonexistent", "password": "securepassword123"}
        )

        assert response.status_code == 401

    async def test_login_inactive_user(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        """Test login with inactive user account."""
        mock_db_session.execute = AsyncMock(
            return_value=lookup_result(create_mock_user(is_active=False))
        )

        response = await client.post(
            "/api/auth/login", json={"username": "testuser", "password": "securepassword123"}
        )

        assert response.status_code == 403
        assert "User account is inactive" in response.json()["detail"]


class TestCurrentUser:
    """Tests for bearer token authentication."""

    async def test_me_with_valid_token(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        """Test that a valid token resolves to the user."""
        mock_db_session.execute = AsyncMock(return_value=lookup_result(create_mock_user()))
        token = create_access_token(USER_ID)

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["id"] == USER_ID

    async def test_me_without_token(self, client: AsyncClient) -> None:
        """Test that missing credentials are rejected."""
        response = await client.get("/api/auth/me")

        assert response.status_code == 401

    async def test_me_with_unknown_user(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        """Test that a token for a deleted user is rejected."""
        mock_db_session.execute = AsyncMock(return_value=lookup_result(None))
        token = create_access_token(USER_ID)

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    async def test_me_with_malformed_subject(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        """Test that a token whose subject is not a user id is rejected."""
        token = create_access_token("album-Qbax5Oy7L8WKf74l")

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        mock_db_session.execute.assert_not_called()


class TestJWT:
    """Tests for JWT token generation and validation."""

    def test_decode_access_token_valid(self) -> None:
        """Test decoding a valid JWT token."""
        payload = decode_access_token(create_access_token(USER_ID))

        assert payload is not None
        assert payload["sub"] == USER_ID
        assert "exp" in payload

    def test_decode_access_token_expired(self) -> None:
        """Test that expired tokens are rejected."""
        token = create_access_token(USER_ID, expires_delta=timedelta(minutes=-1))

        assert decode_access_token(token) is None

    def test_decode_access_token_tampered(self) -> None:
        """Test decoding a tampered JWT token."""
        token = create_access_token(USER_ID)

        assert decode_access_token(token[:-5] + "xxxxx") is None
