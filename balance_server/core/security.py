"""Bearer token issuing and verification."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Union

from jose import JWTError, jwt

from .config import SecuritySettings
from .errors import InvalidCredentialError

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}


class PrincipalKind(str, Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class Principal:
    kind: PrincipalKind
    subject: str
    issued_at: datetime
    expires_at: datetime
    device_id: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.kind is PrincipalKind.ADMIN


def parse_expires_in(value: Union[int, str, timedelta]) -> timedelta:
    """Accept ``3600``, ``"3600"``, ``"45s"``, ``"30m"``, ``"12h"``, ``"7d"`` or ``"2w"``."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        seconds = value
    else:
        match = _DURATION_RE.match(str(value))
        if match is None:
            raise ValueError(f"Invalid token expiry: {value!r}")
        seconds = int(match.group(1)) * _UNIT_SECONDS[match.group(2).lower()]
    if seconds <= 0:
        raise ValueError(f"Token expiry must be positive: {value!r}")
    return timedelta(seconds=seconds)


class TokenIssuer:
    """Issues and decodes signed bearer tokens for users and admins."""

    def __init__(self, settings: SecuritySettings) -> None:
        self._settings = settings
        self._user_ttl = parse_expires_in(settings.access_token_expires_in)
        self._admin_ttl = parse_expires_in(settings.admin_access_token_expires_in)

    def issue_user_token(self, user_id: str, device_id: str, email: str, now: datetime | None = None) -> str:
        return self._encode(
            {"sub": user_id, "typ": PrincipalKind.USER.value, "device_id": device_id, "email": email},
            self._user_ttl,
            now,
        )

    def issue_admin_token(self, admin_id: str, username: str, now: datetime | None = None) -> str:
        return self._encode(
            {"sub": admin_id, "typ": PrincipalKind.ADMIN.value, "username": username},
            self._admin_ttl,
            now,
        )

    def decode(self, token: str) -> Principal:
        try:
            payload = jwt.decode(token, self._settings.secret_key, algorithms=[self._settings.algorithm])
        except JWTError as exc:
            raise InvalidCredentialError("Invalid token") from exc

        subject = payload.get("sub")
        try:
            kind = PrincipalKind(payload.get("typ"))
        except ValueError as exc:
            raise InvalidCredentialError("Invalid token") from exc
        if not subject or "iat" not in payload or "exp" not in payload:
            raise InvalidCredentialError("Invalid token")

        device_id = payload.get("device_id")
        if kind is PrincipalKind.USER and not device_id:
            raise InvalidCredentialError("Invalid token")

        return Principal(
            kind=kind,
            subject=str(subject),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            device_id=device_id,
            email=payload.get("email"),
            username=payload.get("username"),
        )

    def _encode(self, claims: dict, ttl: timedelta, now: datetime | None) -> str:
        issued = now or datetime.now(timezone.utc)
        payload = {
            **claims,
            "iat": int(issued.timestamp()),
            "exp": int((issued + ttl).timestamp()),
        }
        return jwt.encode(payload, self._settings.secret_key, algorithm=self._settings.algorithm)


__all__ = ["Principal", "PrincipalKind", "TokenIssuer", "parse_expires_in"]
