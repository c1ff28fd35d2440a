"""Password hashing and bearer token issuance."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

import bcrypt
import jwt

from foodlog.errors import AuthError, ValidationError

_ALGORITHM = "HS256"
BCRYPT_MAX_PASSWORD_BYTES = 72

_logger = logging.getLogger(__name__)


@dataclass
class PasswordHasher:
    """Salted bcrypt hashing."""

    rounds: int = 12
    _dummy_hash: bytes | None = field(default=None, init=False, repr=False)

    def hash(self, password: str) -> str:
        """Return a salted hash for the password."""
        encoded = _encode_password(password)
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when the password matches the stored hash."""
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError:
            _logger.warning("Stored password hash is malformed")
            return False

    def burn(self, password: str) -> None:
        """Spend the same work as verify() without a real hash."""
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                b"foodlog-dummy", bcrypt.gensalt(rounds=self.rounds)
            )
        encoded = password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
        bcrypt.checkpw(encoded, self._dummy_hash)


def _encode_password(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError("Password is too long")
    return encoded


@dataclass
class TokenService:
    """Issues and verifies signed, time-limited bearer tokens."""

    secret: str
    ttl_days: int = 7

    def issue(self, user_id: UUID, now: datetime | None = None) -> str:
        """Return a token for the user that expires after the TTL."""
        issued_at = now or datetime.now(tz=UTC)
        payload = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + timedelta(days=self.ttl_days)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=_ALGORITHM)

    def verify(self, token: str, now: datetime | None = None) -> UUID:
        """Return the user id a valid token was issued for."""
        options = {"require": ["exp", "sub"]}
        if now is not None:
            # Expiry is checked against the supplied clock below.
            options["verify_exp"] = False
        try:
            payload = jwt.decode(
                token, self.secret, algorithms=[_ALGORITHM], options=options
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthError("Invalid token") from exc

        if now is not None and int(payload["exp"]) <= int(now.timestamp()):
            raise AuthError("Token expired")
        try:
            return UUID(str(payload["sub"]))
        except ValueError as exc:
            raise AuthError("Invalid token") from exc


def parse_bearer(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not authorization:
        raise AuthError("Missing token")
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthError("Missing token")
    return token
