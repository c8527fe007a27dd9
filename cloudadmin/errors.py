"""Errors raised when talking to the cloud API."""

from __future__ import annotations

from http import HTTPStatus


class CloudError(Exception):
    """An error reported by the cloud API or raised while preparing a request."""

    default_status: int | None = None

    def __init__(self, message: str = "", status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status if status is not None else self.default_status


class NotFoundError(CloudError):
    """The requested entity does not exist."""

    default_status = HTTPStatus.NOT_FOUND


class ConflictError(CloudError):
    """The API rejected a request because it conflicts with an existing entity."""

    default_status = HTTPStatus.CONFLICT


class AlreadyExistsError(CloudError):
    """An entity that should be created already exists."""

    default_status = HTTPStatus.CONFLICT

    def __init__(self, message: str = "entity already exists", status: int | None = None) -> None:
        super().__init__(message, status)