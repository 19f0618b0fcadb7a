from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import settings
from exceptions import AuthenticationException, AuthorizationException
from services.authorization import CapabilitySet


class TokenPayload:

    def __init__(self, sub: str, roles: list, firstName: str | None = None, lastName: str | None = None):
        self.sub = sub
        self.roles = roles
        self.firstName = firstName
        self.lastName = lastName


class AuthHandler:
    security = HTTPBearer()
    optional_security = HTTPBearer(auto_error=False)
    secret = settings.SECRET_KEY
    algorithm = "HS256"

    def encode_token(self, user: dict, expires_in: timedelta = timedelta(minutes=15)) -> str:
        """Generate a short-lived access token carrying the user's roles"""
        now = datetime.now(timezone.utc)
        payload = {
            "exp": now + expires_in,
            "iat": now,
            "sub": user["_id"],
            "roles": user.get("roles", []),
            "firstName": user.get("firstName"),
            "lastName": user.get("lastName"),
            "type": "access",
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> TokenPayload:
        """Decode and validate access token"""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
            if payload.get("type") != "access":
                raise jwt.InvalidTokenError("Not an access token")
            return TokenPayload(
                sub=payload["sub"],
                roles=payload.get("roles") or [],
                firstName=payload.get("firstName"),
                lastName=payload.get("lastName"),
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationException(
                message="Token has expired", details={"reason": "expired_signature"}
            ) from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationException(
                message="Invalid token", details={"reason": "invalid_token"}
            ) from e

    def auth_wrapper(self, auth: HTTPAuthorizationCredentials = Security(security)) -> TokenPayload:
        return self.decode_token(auth.credentials)

    def optional_auth_wrapper(
        self, auth: HTTPAuthorizationCredentials | None = Security(optional_security)
    ) -> TokenPayload | None:
        """Anonymous callers get None; a malformed or expired token is still rejected"""
        if auth is None:
            return None
        return self.decode_token(auth.credentials)


auth = AuthHandler()


def get_capabilities(token_payload: TokenPayload | None = Depends(auth.optional_auth_wrapper)) -> CapabilitySet:
    """Capabilities of the current caller, empty for anonymous requests"""
    if token_payload is None:
        return CapabilitySet.anonymous()
    return CapabilitySet(token_payload.roles)


def require_admin(capabilities: CapabilitySet = Depends(get_capabilities)) -> CapabilitySet:
    if not capabilities.has_capability(settings.ADMIN_ROLE):
        raise AuthorizationException(
            message="Admin role required", details={"required_role": settings.ADMIN_ROLE}
        )
    return capabilities
