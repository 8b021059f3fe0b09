"""
Login, refresh-token rotation and logout.

Lifecycle of a refresh token: ISSUED -> (rotated | revoked | expired) -> GONE.
Nothing comes back from GONE.

Refresh checks run in two tiers: the signature/expiry check in TokenCodec
first, then the SessionStore record. IP address and device id are compared
with the stored record, not with the token's own claims. Every revocation
happens before the caller gets an answer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from models.session_store import SessionStore
from services.errors import (
    InvalidCredentialsError,
    SessionTheftSuspectedError,
    UnknownSessionError,
)
from services.user_directory import UserDirectory
from utils.security import (
    RefreshPayload,
    TokenCodec,
    TokenPayload,
    hash_password,
    utcnow,
    verify_password,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserProfile:
    id: int
    username: str
    email: str
    first_name: Optional[str]
    last_name: Optional[str]

    @classmethod
    def from_user(cls, user) -> "UserProfile":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class LoginResult(TokenPair):
    user: UserProfile


@dataclass(frozen=True)
class LogoutResult:
    found: bool


class SessionService:
    def __init__(
        self,
        directory: UserDirectory,
        codec: TokenCodec,
        store: SessionStore,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.directory = directory
        self.codec = codec
        self.store = store
        self._clock = clock or utcnow
        self._dummy_hash: Optional[str] = None

    def login(self, username: str, password: str, ip_address: str, device_id: str) -> LoginResult:
        user = self.directory.find_by_username(username)
        if user is None:
            # burn the same argon2 cost as a real check
            verify_password(password, self._unknown_user_hash())
            logger.info("Login failed for %r", username)
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed for %r", username)
            raise InvalidCredentialsError()

        identity = TokenPayload(user_id=user.id, username=user.username, email=user.email)
        pair = self._mint(identity, ip_address, device_id)
        logger.info("User %s logged in from device %s", user.id, device_id)
        return LoginResult(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            user=UserProfile.from_user(user),
        )

    def refresh(self, refresh_token: str, ip_address: str, device_id: str) -> TokenPair:
        claims = self.codec.verify_refresh_token(refresh_token)

        record = self.store.lookup(refresh_token)
        if record is None:
            raise UnknownSessionError()

        if not record.matches(ip_address, device_id):
            self.store.revoke(refresh_token)
            logger.warning(
                "Refresh token of user %s presented from another ip/device; revoked",
                record.user_id,
            )
            raise SessionTheftSuspectedError()

        # one-time use: only the request that actually removed the record rotates
        if not self.store.revoke(refresh_token):
            raise UnknownSessionError()

        return self._mint(claims.identity(), ip_address, device_id)

    def logout(self, refresh_token: str) -> LogoutResult:
        return LogoutResult(found=self.store.revoke(refresh_token))

    def logout_everywhere(self, user_id: int) -> int:
        revoked = self.store.revoke_all_for_user(user_id)
        logger.info("Revoked %d refresh token(s) for user %s", revoked, user_id)
        return revoked

    def verify_access_token(self, token: str) -> TokenPayload:
        return self.codec.verify_access_token(token)

    def _mint(self, identity: TokenPayload, ip_address: str, device_id: str) -> TokenPair:
        access_token = self.codec.issue_access_token(identity)
        refresh_token = self.codec.issue_refresh_token(
            RefreshPayload(
                user_id=identity.user_id,
                username=identity.username,
                email=identity.email,
                ip_address=ip_address,
                device_id=device_id,
            )
        )
        self.store.register(
            refresh_token,
            identity.user_id,
            ip_address,
            device_id,
            self._clock() + self.codec.refresh_ttl,
        )
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def _unknown_user_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = hash_password("unknown-user-placeholder")
        return self._dummy_hash
