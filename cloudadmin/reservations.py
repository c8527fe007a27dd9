"""Commands that manage machine reservations of projects."""

from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence

from cloudadmin.errors import AlreadyExistsError, ConflictError
from cloudadmin.models import (
    MachineReservation,
    MachineReservationCreateRequest,
    MachineReservationUpdateRequest,
    MachineReservationUsage,
    convert,
)
from cloudadmin.sorters import (
    machine_reservations_sorter,
    machine_reservations_usage_sorter,
    parse_sort_keys,
)


class ReservationClient(Protocol):
    """The part of the cloud API used for machine reservations."""

    def create_machine_reservation(self, body: dict[str, Any], force: bool) -> dict[str, Any]: ...

    def update_machine_reservation(self, body: dict[str, Any], force: bool) -> dict[str, Any]: ...

    def delete_machine_reservation(self, reservation_id: str) -> dict[str, Any]: ...

    def get_machine_reservation(self, reservation_id: str) -> dict[str, Any]: ...

    def list_machine_reservations(self, body: dict[str, Any]) -> list[dict[str, Any]]: ...

    def machine_reservations_usage(self, body: dict[str, Any]) -> list[dict[str, Any]]: ...


def _find_request(**filters: str | None) -> dict[str, str]:
    return {key: value for key, value in filters.items() if value}


def _exactly_one(args: Sequence[str]) -> str:
    if not args:
        raise ValueError("no argument given")
    if len(args) > 1:
        raise ValueError(f"too many arguments given ({len(args)})")
    return args[0]


def create_request_from_options(
    amount: int = 0,
    description: str = "",
    partitions: Iterable[str] | None = None,
    project: str = "",
    size: str = "",
) -> MachineReservationCreateRequest:
    """Build a create request from command line options, leaving empty values unset."""
    partition_ids = list(partitions or [])
    return MachineReservationCreateRequest(
        amount=amount or None,
        description=description or None,
        partition_ids=partition_ids or None,
        project_id=project or None,
        size_id=size or None,
    )


def update_request_from_options(
    args: Sequence[str],
    amount: int = 0,
    description: str = "",
    partitions: Iterable[str] | None = None,
) -> MachineReservationUpdateRequest:
    """Build an update request for the single reservation id given in ``args``."""
    reservation_id = _exactly_one(args)
    partition_ids = list(partitions or [])
    return MachineReservationUpdateRequest(
        id=reservation_id,
        amount=amount or None,
        description=description or None,
        partition_ids=partition_ids or None,
    )


class MachineReservationCommands:
    """Create, read, update and delete machine reservations through the API."""

    def __init__(self, client: ReservationClient) -> None:
        self.client = client

    def create(self, request: MachineReservationCreateRequest, force: bool = False) -> MachineReservation:
        try:
            payload = self.client.create_machine_reservation(request.to_dict(), force)
        except ConflictError as err:
            raise AlreadyExistsError() from err
        return MachineReservation.from_dict(payload)

    def delete(self, reservation_id: str) -> MachineReservation:
        return MachineReservation.from_dict(self.client.delete_machine_reservation(reservation_id))

    def get(self, reservation_id: str) -> MachineReservation:
        return MachineReservation.from_dict(self.client.get_machine_reservation(reservation_id))

    def list(
        self,
        reservation_id: str | None = None,
        project: str | None = None,
        size: str | None = None,
        tenant: str | None = None,
    ) -> list[MachineReservation]:
        """List reservations matching the filters, sorted by the default keys."""
        body = _find_request(projectid=project, sizeid=size, tenant=tenant, id=reservation_id)
        reservations = [
            MachineReservation.from_dict(item) for item in self.client.list_machine_reservations(body)
        ]
        machine_reservations_sorter().sort_by(reservations)
        return reservations

    def update(self, request: MachineReservationUpdateRequest, force: bool = False) -> MachineReservation:
        payload = self.client.update_machine_reservation(request.to_dict(), force)
        return MachineReservation.from_dict(payload)

    def apply(
        self, reservations: Iterable[MachineReservation], force: bool = False
    ) -> list[MachineReservation]:
        """Create each reservation, updating those that already exist."""
        results = []
        for reservation in reservations:
            _, create_request, update_request = convert(reservation)
            try:
                results.append(self.create(create_request, force))
            except AlreadyExistsError:
                results.append(self.update(update_request, force))
        return results

    def usage(
        self,
        project: str | None = None,
        size: str | None = None,
        tenant: str | None = None,
        sort_keys: Iterable[str] | None = None,
    ) -> list[MachineReservationUsage]:
        """Return the current usage of reservations, sorted by ``sort_keys`` or the defaults."""
        body = _find_request(projectid=project, sizeid=size, tenant=tenant)
        keys = parse_sort_keys(sort_keys or [])
        usage = [
            MachineReservationUsage.from_dict(item) for item in self.client.machine_reservations_usage(body)
        ]
        machine_reservations_usage_sorter().sort_by(usage, *keys)
        return usage