"""Multi-key sorting of API entities."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeVar

from cloudadmin.models import MachineReservation, MachineReservationBillingUsage, MachineReservationUsage

T = TypeVar("T")

_ASCENDING = {"asc", "ascending"}
_DESCENDING = {"desc", "descending"}


class SortError(ValueError):
    """A sort key is unknown or malformed."""


@dataclass(frozen=True)
class SortKey:
    """A field to sort by and its direction."""

    id: str
    descending: bool = False


def parse_sort_keys(values: Iterable[str]) -> list[SortKey]:
    """Parse values of the form ``field`` or ``field:asc`` / ``field:desc``."""
    keys = []
    for value in values:
        name, sep, direction = value.partition(":")
        name = name.strip()
        if not name:
            raise SortError(f"invalid sort key: {value!r}")
        direction = direction.strip().lower()
        if not sep or direction in _ASCENDING:
            keys.append(SortKey(name))
        elif direction in _DESCENDING:
            keys.append(SortKey(name, descending=True))
        else:
            raise SortError(f"unsupported sort direction: {direction}")
    return keys


class Sorter(Generic[T]):
    """Sorts lists by several fields, falling back to default keys."""

    def __init__(self, fields: dict[str, Callable[[T], Any]], default_keys: Iterable[SortKey]) -> None:
        self.fields = dict(fields)
        self.default_keys = list(default_keys)

    @property
    def available_keys(self) -> list[str]:
        return sorted(self.fields)

    def sort_by(self, data: list[T], *args: SortKey) -> None:
        """Sort ``data`` in place by the given keys, or by the default keys."""
        keys = list(args) or self.default_keys
        for key in keys:
            if key.id not in self.fields:
                raise SortError(f"sort key does not exist: {key.id}")

        def compare(a: T, b: T) -> int:
            for key in keys:
                extract = self.fields[key.id]
                left, right = extract(a), extract(b)
                if left == right:
                    continue
                result = -1 if left < right else 1
                return -result if key.descending else result
            return 0

        data.sort(key=functools.cmp_to_key(compare))


def _int(value: str | None) -> int:
    try:
        return int(value or "")
    except ValueError:
        return 0


def _float(value: str | None) -> float:
    try:
        return float(value or "")
    except ValueError:
        return 0.0


def machine_reservations_sorter() -> Sorter[MachineReservation]:
    return Sorter(
        {
            "id": lambda r: r.id or "",
            "tenant": lambda r: r.tenant or "",
            "project": lambda r: r.project_id or "",
            "size": lambda r: r.size_id or "",
            "amount": lambda r: r.amount or 0,
        },
        [SortKey("tenant"), SortKey("project"), SortKey("size"), SortKey("id")],
    )


def machine_reservations_usage_sorter() -> Sorter[MachineReservationUsage]:
    return Sorter(
        {
            "id": lambda r: r.id or "",
            "tenant": lambda r: r.tenant or "",
            "project": lambda r: r.project_id or "",
            "size": lambda r: r.size_id or "",
            "partition": lambda r: r.partition_id or "",
            "reservations": lambda r: r.reservations or 0,
            "used-reservations": lambda r: r.used_reservations or 0,
        },
        [SortKey("tenant"), SortKey("project"), SortKey("partition"), SortKey("size"), SortKey("id")],
    )


def machine_reservations_billing_usage_sorter() -> Sorter[MachineReservationBillingUsage]:
    return Sorter(
        {
            "id": lambda r: r.id or "",
            "tenant": lambda r: r.tenant or "",
            "project": lambda r: r.project_id or "",
            "size": lambda r: r.size_id or "",
            "partition": lambda r: r.partition or "",
            "reservation-seconds": lambda r: _int(r.reservation_seconds),
            "average": lambda r: _float(r.average),
        },
        [SortKey("tenant"), SortKey("project"), SortKey("partition"), SortKey("size"), SortKey("id")],
    )