"""Unit tests for AuthHandler and caller capabilities"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from authentication import AuthHandler, get_capabilities, require_admin
from exceptions import AuthenticationException, AuthorizationException
from services.authorization import AuthorizationOracle, CapabilitySet


@pytest.fixture
def auth_handler():
    return AuthHandler()


@pytest.fixture
def mock_user():
    """Mock user object"""
    return {
        "_id": "test-user-id",
        "roles": ["ADMIN"],
        "firstName": "Test",
        "lastName": "User",
    }


class TestEncodeToken:
    """Test JWT token encoding"""

    def test_round_trip(self, auth_handler, mock_user):
        token = auth_handler.encode_token(mock_user)

        payload = auth_handler.decode_token(token)
        assert payload.sub == "test-user-id"
        assert payload.roles == ["ADMIN"]
        assert payload.firstName == "Test"

    def test_token_is_short_lived(self, auth_handler, mock_user):
        token = auth_handler.encode_token(mock_user)
        raw = jwt.decode(token, auth_handler.secret, algorithms=[auth_handler.algorithm])

        assert raw["type"] == "access"
        assert raw["exp"] - raw["iat"] == 15 * 60

    def test_missing_roles_default_to_empty(self, auth_handler):
        token = auth_handler.encode_token({"_id": "u1"})
        assert auth_handler.decode_token(token).roles == []


class TestDecodeToken:
    """Test JWT token validation"""

    def test_expired_token(self, auth_handler, mock_user):
        token = auth_handler.encode_token(mock_user, expires_in=timedelta(seconds=-1))

        with pytest.raises(AuthenticationException) as exc_info:
            auth_handler.decode_token(token)
        assert exc_info.value.message == "Token has expired"
        assert exc_info.value.status_code == 401

    def test_wrong_signature(self, auth_handler, mock_user):
        token = jwt.encode(
            {"sub": "u1", "type": "access", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "another-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationException) as exc_info:
            auth_handler.decode_token(token)
        assert exc_info.value.details["reason"] == "invalid_token"

    def test_refresh_token_is_rejected(self, auth_handler):
        token = jwt.encode(
            {"sub": "u1", "type": "refresh", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            auth_handler.secret,
            algorithm=auth_handler.algorithm,
        )
        with pytest.raises(AuthenticationException):
            auth_handler.decode_token(token)

    def test_garbage(self, auth_handler):
        with pytest.raises(AuthenticationException):
            auth_handler.decode_token("not-a-jwt")


class TestCapabilities:
    """Test mapping a caller to a capability set"""

    def test_anonymous_caller(self):
        capabilities = get_capabilities(None)
        assert len(capabilities) == 0
        assert not capabilities.has_capability("ADMIN")

    def test_roles_become_capabilities(self, auth_handler, mock_user):
        payload = auth_handler.decode_token(auth_handler.encode_token(mock_user))
        capabilities = get_capabilities(payload)
        assert "ADMIN" in capabilities
        assert isinstance(capabilities, AuthorizationOracle)

    def test_require_admin(self):
        admin = CapabilitySet(["ADMIN"])
        assert require_admin(admin) is admin

    def test_require_admin_rejects_others(self):
        with pytest.raises(AuthorizationException) as exc_info:
            require_admin(CapabilitySet(["USER"]))
        assert exc_info.value.status_code == 403
        assert exc_info.value.details == {"required_role": "ADMIN"}
