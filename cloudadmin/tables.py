"""Table layouts for machine reservations and their usage."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Sequence

from cloudadmin.models import (
    MachineReservation,
    MachineReservationBillingUsageResponse,
    MachineReservationUsage,
)

_ELLIPSIS = "..."
_DESCRIPTION_LIMIT = 50
_COLUMN_GAP = "   "
_INTEGER = re.compile(r"[+-]?\d+")

Table = tuple[list[str], list[list[str]]]


def _truncate_end(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    if max_length <= len(_ELLIPSIS):
        return text[:max_length]
    return text[: max_length - len(_ELLIPSIS)] + _ELLIPSIS


def _parse_int(value: str | None) -> int | None:
    if value is None or not _INTEGER.fullmatch(value):
        return None
    return int(value)


def _humanize_duration(total_seconds: int) -> str:
    sign = -1 if total_seconds < 0 else 1
    minutes, seconds = divmod(abs(total_seconds), 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    chunks = (("d", days), ("h", hours), ("m", minutes), ("s", seconds))
    return " ".join(f"{sign * amount}{unit}" for unit, amount in chunks if amount)


def _time_string(value: datetime | None) -> str:
    if value is None:
        return "0001-01-01 00:00:00 +0000 UTC"
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.strftime("%Y-%m-%d %H:%M:%S")
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset() or timedelta(0)
    offset_text = value.strftime("%z") or "+0000"
    name = value.tzname()
    if not name or name.startswith("UTC"):
        name = "UTC" if offset == timedelta(0) else offset_text
    return f"{text} {offset_text} {name}"


def _labels(labels: dict[str, str]) -> str:
    return "\n".join(sorted(f"{key}={value}" for key, value in labels.items()))


def humanize_seconds(seconds: str | None) -> str:
    """Render a number of seconds given as text as a short duration, or '' if invalid."""
    duration = _parse_int(seconds)
    if duration is None:
        return ""
    return _humanize_duration(duration)


def seconds_costs(seconds: str | None, costs_per_hour: float) -> str:
    """Render the costs of the full hours in ``seconds``, or '' if there are none to show."""
    if costs_per_hour <= 0:
        return ""
    duration = _parse_int(seconds)
    if duration is None:
        return ""
    full_hours = abs(duration) // 3600 * (-1 if duration < 0 else 1)
    return f" ({float(full_hours) * costs_per_hour:.2f} €)"


def machine_reservations_table(data: Iterable[MachineReservation], wide: bool) -> Table:
    """Return the header and rows for a list of machine reservations."""
    header = ["ID", "Tenant", "Project", "Size", "Amount", "Partitions", "Description"]
    if wide:
        header.append("Labels")

    rows = []
    for reservation in data:
        row = [
            reservation.id or "",
            reservation.tenant or "",
            reservation.project_id or "",
            reservation.size_id or "",
            str(reservation.amount or 0),
            ",".join(sorted(reservation.partition_ids)),
            _truncate_end(reservation.description, _DESCRIPTION_LIMIT),
        ]
        if wide:
            row += [reservation.description, _labels(reservation.labels)]
        rows.append(row)
    return header, rows


def machine_reservations_usage_table(data: Iterable[MachineReservationUsage], wide: bool) -> Table:
    """Return the header and rows for the usage of machine reservations."""
    header = ["ID", "Tenant", "Project", "Partition", "Size", "Reservations"]
    if wide:
        header += ["Allocations", "Labels"]

    rows = []
    for usage in data:
        total = usage.reservations or 0
        used = usage.used_reservations or 0
        reservations = f"{total - used} ({used}/{total} used)" if total > 0 else "0"
        row = [
            usage.id or "",
            usage.tenant or "",
            usage.project_id or "",
            usage.partition_id or "",
            usage.size_id or "",
            reservations,
        ]
        if wide:
            row += [str(usage.project_allocations or 0), _labels(usage.labels)]
        rows.append(row)
    return header, rows


def machine_reservations_billing_table(
    data: MachineReservationBillingUsageResponse, costs_per_hour: float = 0.0
) -> Table:
    """Return the header and rows for billed machine reservations, with a total row."""
    header = [
        "Tenant",
        "From",
        "To",
        "ProjectID",
        "ProjectName",
        "Partition",
        "Size",
        "ID",
        "Reservations * Time",
        "Average",
    ]
    start, end = _time_string(data.from_), _time_string(data.to)
    rows = [
        [
            usage.tenant or "",
            start,
            end,
            usage.project_id or "",
            usage.project_name or "",
            usage.partition or "",
            usage.size_id or "",
            usage.id or "",
            humanize_seconds(usage.reservation_seconds or ""),
            usage.average or "",
        ]
        for usage in data.usage
    ]
    total = data.accumulated_usage
    total_seconds = total.reservation_seconds or ""
    rows.append(
        ["Total", "", "", "", "", "", "", ""]
        + [
            humanize_seconds(total_seconds) + seconds_costs(total_seconds, costs_per_hour),
            total.average or "",
        ]
    )
    return header, rows


def to_header_and_rows(data: Any, wide: bool) -> Table:
    """Choose the table layout matching the type of ``data``."""
    if isinstance(data, MachineReservation):
        return machine_reservations_table([data], wide)
    if isinstance(data, MachineReservationUsage):
        return machine_reservations_usage_table([data], wide)
    if isinstance(data, MachineReservationBillingUsageResponse):
        return machine_reservations_billing_table(data)
    if isinstance(data, list):
        if all(isinstance(item, MachineReservation) for item in data):
            return machine_reservations_table(data, wide)
        if all(isinstance(item, MachineReservationUsage) for item in data):
            return machine_reservations_usage_table(data, wide)
    raise TypeError(f"no table layout for {type(data).__name__}")


def render_table(header: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a table as aligned plain text with an upper-case header."""
    table = [[column.upper() for column in header], *(list(row) for row in rows)]
    cells = [[cell.split("\n") for cell in row] for row in table]
    column_count = max(len(row) for row in cells)
    widths = [0] * column_count
    for row in cells:
        for column, lines in enumerate(row):
            widths[column] = max(widths[column], *(len(line) for line in lines))

    output = []
    for row in cells:
        height = max((len(lines) for lines in row), default=1)
        for line_number in range(height):
            parts = [
                (lines[line_number] if line_number < len(lines) else "").ljust(width)
                for lines, width in zip(row, widths)
            ]
            output.append(_COLUMN_GAP.join(parts).rstrip())
    return "\n".join(output) + "\n"