"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT creation/verification via PyJWT (TokenCodec)
- JTI generation for token identifiers
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from services.errors import InvalidTokenError

ph = PasswordHasher()

ACCESS = "access"
REFRESH = "refresh"


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password using argon2
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID).
    """
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenPayload:
    """Claims carried by an access token."""

    user_id: int
    username: str
    email: str


@dataclass(frozen=True)
class RefreshPayload(TokenPayload):
    """Access claims plus the ip/device the refresh token was minted for."""

    ip_address: str
    device_id: str

    def identity(self) -> TokenPayload:
        return TokenPayload(user_id=self.user_id, username=self.username, email=self.email)


class TokenCodec:
    """
    Stateless signing and verification of access and refresh tokens.

    The two token classes are signed with different secrets and also carry a
    ``type`` claim, so neither can be replayed as the other. Verification
    never touches a store; revocation is enforced by the session store.
    """

    def __init__(
        self,
        access_secret: str = "access-secret",
        refresh_secret: str = "refresh-secret",
        access_ttl: timedelta = timedelta(hours=1),
        refresh_ttl: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
        issuer: str = "marketplace-api",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if access_secret == refresh_secret:
            raise ValueError("access and refresh secrets must differ")
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm
        self.issuer = issuer
        self._clock = clock or utcnow

    def issue_access_token(self, payload: TokenPayload) -> str:
        return self._encode(self._claims(payload), self.access_secret, self.access_ttl, ACCESS)

    def issue_refresh_token(self, payload: RefreshPayload) -> str:
        claims = self._claims(payload)
        claims["ip"] = payload.ip_address
        claims["device_id"] = payload.device_id
        return self._encode(claims, self.refresh_secret, self.refresh_ttl, REFRESH)

    def verify_access_token(self, token: str) -> TokenPayload:
        decoded = self._decode(token, self.access_secret, ACCESS)
        try:
            return TokenPayload(
                user_id=int(decoded["sub"]),
                username=decoded["username"],
                email=decoded["email"],
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenError("Malformed access token")

    def verify_refresh_token(self, token: str) -> RefreshPayload:
        decoded = self._decode(token, self.refresh_secret, REFRESH)
        try:
            return RefreshPayload(
                user_id=int(decoded["sub"]),
                username=decoded["username"],
                email=decoded["email"],
                ip_address=decoded["ip"],
                device_id=decoded["device_id"],
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenError("Malformed refresh token")

    def _claims(self, payload: TokenPayload) -> Dict[str, Any]:
        return {
            "sub": str(payload.user_id),
            "username": payload.username,
            "email": payload.email,
        }

    def _encode(self, claims: Dict[str, Any], secret: str, ttl: timedelta, token_type: str) -> str:
        now = self._clock()
        claims.update(
            {
                "iss": self.issuer,
                "iat": int(now.timestamp()),
                "exp": int((now + ttl).timestamp()),
                "type": token_type,
                "jti": generate_jti(),
            }
        )
        return jwt.encode(claims, secret, algorithm=self.algorithm)

    def _decode(self, token: str, secret: str, expected_type: str) -> Dict[str, Any]:
        if not isinstance(token, str) or not token:
            raise InvalidTokenError(f"Invalid or expired {expected_type} token")
        try:
            decoded = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                # exp/iat are checked below against self._clock, not wall time
                options={
                    "require": ["exp", "iat", "sub", "type"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError:
            raise InvalidTokenError(f"Invalid or expired {expected_type} token")

        now = int(self._clock().timestamp())
        try:
            live = int(decoded["iat"]) <= now < int(decoded["exp"])
        except (TypeError, ValueError):
            live = False
        if not live:
            raise InvalidTokenError(f"Invalid or expired {expected_type} token")

        if decoded.get("type") != expected_type:
            raise InvalidTokenError("Wrong token type")
        return decoded
