"""User Accounts — signup, password login and JWT identity for /users.

Invariants:
    - Passwords are stored only as bcrypt hashes (passwordHash) and never returned
    - username and email are each unique across users (409 on clash)
    - login() accepts a username or an email and issues an HS256 JWT (sub = user id)
    - me() resolves a token to the stored user; any decode failure is 401
    - signup() never suspends: the uniqueness check and the insert run back to back

Design Decisions:
    - Users live in the catalog's users registry like every other kind
    - Separate from API tokens: /api-security guards resources, /users is the account API
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

import bcrypt
import jwt

from shuttle.core.domain_types import Record
from shuttle.core.errors import (
    AuthenticationError,
    DuplicateRecordError,
    RecordValidationError,
)
from shuttle.core.registry import ResourceRegistry, is_empty
from shuttle.services.api_tokens import bearer_token

logger = logging.getLogger(__name__)

SIGNUP_FIELDS = ("username", "email", "password", "role")

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

DEMO_USERS = (
    {
        "id": "USR-001",
        "username": "thabiso",
        "email": "thabiso@example.com",
        "password": "123456",
        "role": "passenger",
        "name": "Thabiso Mapoulo",
    },
    {
        "id": "ADM-001",
        "username": "admin",
        "email": "admin@example.com",
        "password": "admin123",
        "role": "admin",
        "name": "Admin User",
    },
)


def public_user(user: Record) -> dict[str, Any]:
    return {
        "id": user["id"],
        "username": user["username"],
        "name": user.get("name") or user["username"],
        "email": user["email"],
        "role": user["role"],
    }


class UserService:
    def __init__(
        self,
        registry: ResourceRegistry,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 120,
        hash_rounds: int = 12,
    ):
        self.registry = registry
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes
        self.hash_rounds = hash_rounds

    def signup(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Create a user with a hashed password; returns the public view."""
        missing = [f for f in SIGNUP_FIELDS if is_empty(fields.get(f))]
        if missing:
            raise RecordValidationError(missing)
        password = str(fields["password"])
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise RecordValidationError(
                ["password"], f"password must be at most {MAX_PASSWORD_BYTES} bytes",
            )

        username, email = str(fields["username"]), str(fields["email"])
        for existing in self.registry:
            if existing.get("username") == username:
                raise DuplicateRecordError(self.registry.kind.label, username)
            if existing.get("email") == email:
                raise DuplicateRecordError(self.registry.kind.label, email)

        record = {k: v for k, v in fields.items() if k not in ("password", "passwordHash")}
        record["name"] = fields.get("name") or username
        record["passwordHash"] = bcrypt.hashpw(
            password.encode(), bcrypt.gensalt(rounds=self.hash_rounds),
        ).decode()
        user = self.registry.create(record)
        logger.info(
            f"User {username} signed up",
            extra={"resource_kind": self.registry.kind.value, "record_id": user["id"]},
        )
        return public_user(user)

    def login(self, identifier: str, password: str) -> tuple[str, dict[str, Any]]:
        user = self._find(identifier)
        if user is None:
            raise AuthenticationError("User not found")
        if not _password_matches(password, user["passwordHash"]):
            logger.warning(f"Failed login for {identifier!r}")
            raise AuthenticationError("Invalid password")
        return self.issue_token(user), public_user(user)

    def issue_token(self, user: Record) -> str:
        expires = datetime.now(timezone.utc) + timedelta(minutes=self.expires_minutes)
        claims = {"sub": user["id"], "role": user["role"], "exp": expires}
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def me(self, authorization: str | None) -> dict[str, Any]:
        token = bearer_token(authorization)
        if token is None:
            raise AuthenticationError("Missing token")
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected user token: {e}")
            raise AuthenticationError("Invalid token")
        user_id = claims.get("sub")
        if user_id is None or user_id not in self.registry:
            raise AuthenticationError("User not found")
        return public_user(self.registry.get(user_id))

    def seed_demo_users(self) -> None:
        for user in DEMO_USERS:
            if user["id"] not in self.registry:
                self.signup(user)
        logger.info(f"Seeded {len(DEMO_USERS)} demo users")

    def _find(self, identifier: str) -> Record | None:
        for user in self.registry:
            if identifier in (user.get("username"), user.get("email")):
                return user
        return None


def _password_matches(password: str, password_hash: str) -> bool:
    encoded = password.encode()
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode())
