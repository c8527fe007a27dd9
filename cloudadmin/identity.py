"""Current user, version and minimum client version information."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

import jwt

from cloudadmin.contexts import Version
from cloudadmin.errors import CloudError


class VersionClient(Protocol):
    """The part of the cloud API that reports the server version."""

    def info(self) -> dict[str, Any] | None: ...


class VersionInfoError(CloudError):
    """The server version could not be fetched; ``version`` still holds the client side."""

    def __init__(self, message: str, version: Version) -> None:
        super().__init__(message)
        self.version = version


def _format_expiry(timestamp: int) -> str:
    moment = datetime.fromtimestamp(timestamp).astimezone()
    return (
        f"{moment:%a %b} {moment.day} {moment:%H:%M:%S} "
        f"{moment.tzname() or moment.strftime('%z')} {moment.year}"
    )


def whoami_lines(token: str) -> list[str]:
    """Describe the user of an ID token, without validating its signature."""
    try:
        claims = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False, "verify_aud": False},
        )
    except jwt.PyJWTError as err:
        raise ValueError(f"unable to parse token: {err}") from err

    name = claims.get("name") or claims.get("sub") or ""
    lines = [f"UserId: {name}"]
    if claims.get("tenant"):
        lines.append(f"Tenant: {claims['tenant']}")
    if claims.get("iss"):
        lines.append(f"Issuer: {claims['iss']}")
    lines.append("Groups:")
    lines.extend(f" {group}" for group in claims.get("groups") or [])
    lines.append(f"Expires at {_format_expiry(int(claims.get('exp') or 0))}")
    return lines


def version_info(client_version: str, client: VersionClient) -> Version:
    """Return client and server versions; raises VersionInfoError if the server fails."""
    version = Version(client=client_version)
    try:
        version.server = client.info()
    except (CloudError, OSError) as err:
        raise VersionInfoError(f"failed to get server info: {err}", version) from err
    return version


def minimum_client_version(client: VersionClient) -> str | None:
    """Return the minimum client version the server asks for, if any."""
    payload = client.info()
    if payload is None:
        return None
    return payload.get("min_client_version")