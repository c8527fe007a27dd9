"""Machine reservation data models and request conversions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _parse_time(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class MachineReservation:
    """A reservation of machines of one size for a project."""

    id: str | None = None
    amount: int | None = None
    description: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    partition_ids: list[str] = field(default_factory=list)
    project_id: str | None = None
    size_id: str | None = None
    tenant: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MachineReservation:
        return cls(
            id=data.get("id"),
            amount=data.get("amount"),
            description=data.get("description") or "",
            labels=dict(data.get("labels") or {}),
            partition_ids=list(data.get("partitionids") or []),
            project_id=data.get("projectid"),
            size_id=data.get("sizeid"),
            tenant=data.get("tenant"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "description": self.description,
            "id": self.id,
            "labels": dict(self.labels),
            "partitionids": list(self.partition_ids),
            "projectid": self.project_id,
            "sizeid": self.size_id,
            "tenant": self.tenant,
        }


@dataclass
class MachineReservationCreateRequest:
    """Request body to create a machine reservation."""

    amount: int | None = None
    description: str | None = None
    partition_ids: list[str] | None = None
    project_id: str | None = None
    size_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "amount": self.amount,
                "description": self.description,
                "partitionids": None if self.partition_ids is None else list(self.partition_ids),
                "projectid": self.project_id,
                "sizeid": self.size_id,
            }
        )


@dataclass
class MachineReservationUpdateRequest:
    """Request body to update a machine reservation."""

    id: str | None = None
    amount: int | None = None
    description: str | None = None
    partition_ids: list[str] | None = None
    project_id: str | None = None
    size_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "amount": self.amount,
                "description": self.description,
                "partitionids": None if self.partition_ids is None else list(self.partition_ids),
                "projectid": self.project_id,
                "sizeid": self.size_id,
            }
        )


@dataclass
class MachineReservationUsage:
    """Current usage of a machine reservation in one partition."""

    id: str | None = None
    tenant: str | None = None
    project_id: str | None = None
    partition_id: str | None = None
    size_id: str | None = None
    reservations: int | None = None
    used_reservations: int | None = None
    project_allocations: int | None = None
    labels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MachineReservationUsage:
        return cls(
            id=data.get("id"),
            tenant=data.get("tenant"),
            project_id=data.get("projectid"),
            partition_id=data.get("partitionid"),
            size_id=data.get("sizeid"),
            reservations=data.get("reservations"),
            used_reservations=data.get("usedreservations"),
            project_allocations=data.get("projectallocations"),
            labels=dict(data.get("labels") or {}),
        )


@dataclass
class MachineReservationBillingUsage:
    """Billing usage of one machine reservation over a time span."""

    id: str | None = None
    tenant: str | None = None
    project_id: str | None = None
    project_name: str | None = None
    partition: str | None = None
    size_id: str | None = None
    reservation_seconds: str | None = None
    average: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MachineReservationBillingUsage:
        return cls(
            id=data.get("id"),
            tenant=data.get("tenant"),
            project_id=data.get("projectid"),
            project_name=data.get("projectname"),
            partition=data.get("partition"),
            size_id=data.get("sizeid"),
            reservation_seconds=data.get("reservationseconds"),
            average=data.get("average"),
        )


@dataclass
class MachineReservationBillingUsageResponse:
    """Billing usage of machine reservations with an accumulated total."""

    from_: datetime | None = None
    to: datetime | None = None
    usage: list[MachineReservationBillingUsage] = field(default_factory=list)
    accumulated_usage: MachineReservationBillingUsage = field(
        default_factory=MachineReservationBillingUsage
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MachineReservationBillingUsageResponse:
        return cls(
            from_=_parse_time(data.get("from")),
            to=_parse_time(data.get("to")),
            usage=[MachineReservationBillingUsage.from_dict(u) for u in data.get("usage") or []],
            accumulated_usage=MachineReservationBillingUsage.from_dict(
                data.get("accumulatedusage") or {}
            ),
        )


def to_create_request(reservation: MachineReservation) -> MachineReservationCreateRequest:
    """Build the create request matching an existing reservation."""
    return MachineReservationCreateRequest(
        amount=reservation.amount,
        description=reservation.description,
        partition_ids=list(reservation.partition_ids),
        project_id=reservation.project_id,
        size_id=reservation.size_id,
    )


def to_update_request(reservation: MachineReservation) -> MachineReservationUpdateRequest:
    """Build the update request matching an existing reservation."""
    return MachineReservationUpdateRequest(
        amount=reservation.amount,
        description=reservation.description,
        partition_ids=list(reservation.partition_ids),
        project_id=reservation.project_id,
        size_id=reservation.size_id,
    )


def convert(
    reservation: MachineReservation,
) -> tuple[str, MachineReservationCreateRequest, MachineReservationUpdateRequest]:
    """Return the id with create and update requests for a reservation."""
    if reservation.id is None:
        raise ValueError("id is not defined")
    return reservation.id, to_create_request(reservation), to_update_request(reservation)