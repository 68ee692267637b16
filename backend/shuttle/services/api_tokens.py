"""API Tokens — demo-user login and bearer token lookup.

Invariants:
    - One configured demo user; a successful login issues a fresh 32-hex token
    - Tokens live in the tokens registry and die with the process
    - verify() accepts "<token>" or "Bearer <token>"
"""

import hmac
import logging
from dataclasses import dataclass

from shuttle.core.domain_types import Record
from shuttle.core.errors import AuthenticationError
from shuttle.core.registry import ResourceRegistry

logger = logging.getLogger(__name__)


@dataclass
class ApiUser:
    id: str
    username: str
    password: str
    email: str
    role: str = "admin"

    def public(self) -> dict[str, str]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
        }


class TokenService:
    def __init__(self, registry: ResourceRegistry, user: ApiUser):
        self.registry = registry
        self.user = user

    def login(self, username: str, password: str) -> Record:
        username_ok = hmac.compare_digest(username.encode(), self.user.username.encode())
        password_ok = hmac.compare_digest(password.encode(), self.user.password.encode())
        if not (username_ok and password_ok):
            logger.warning(f"Failed login for {username!r}")
            raise AuthenticationError("Invalid credentials")
        return self.registry.create({"userId": self.user.id})

    def verify(self, authorization: str | None) -> Record:
        token = bearer_token(authorization)
        if token is None:
            raise AuthenticationError("Unauthorized: Token required")
        if token not in self.registry:
            raise AuthenticationError("Unauthorized: Invalid token")
        return self.registry.get(token)


def bearer_token(authorization: str | None) -> str | None:
    """The token from "<token>" or "Bearer <token>"; None when blank."""
    if not authorization or not authorization.strip():
        return None
    token = authorization.strip()
    if token.lower().startswith("bearer "):
        token = token[7:].strip()
    return token or None
