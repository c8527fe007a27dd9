# cloudadmin

A Python library for managing resources behind a cloud API: projects,
tenants, volumes, snapshots, QoS policies and machine reservations. It
holds the request models, the logic that turns user input and YAML
documents into API requests, sorting and table layout of results, and the
local configuration file of API contexts.

Every command class takes a `client` object that performs the actual API
calls (the expected methods are described by the `Protocol` classes in
each module), so the same code works against a live service or against a
stand-in in tests.

## Modules

- `cloudadmin.errors` – `CloudError` (with `message` and an HTTP `status`),
  and its subclasses `NotFoundError` (404), `ConflictError` (409) and
  `AlreadyExistsError` (409).
- `cloudadmin.models` – machine reservation dataclasses
  (`MachineReservation`, `MachineReservationCreateRequest`,
  `MachineReservationUpdateRequest`, `MachineReservationUsage`,
  `MachineReservationBillingUsage`, `MachineReservationBillingUsageResponse`)
  with `from_dict` / `to_dict`, and the conversions `to_create_request`,
  `to_update_request` and `convert`.
- `cloudadmin.sorters` – multi-key sorting (`Sorter`, `SortKey`,
  `parse_sort_keys`, `SortError`) and ready-made sorters:
  `machine_reservations_sorter`, `machine_reservations_usage_sorter` and
  `machine_reservations_billing_usage_sorter`.
- `cloudadmin.tables` – header and rows for reservations, usage and billing
  (`machine_reservations_table`, `machine_reservations_usage_table`,
  `machine_reservations_billing_table`, `to_header_and_rows`),
  `humanize_seconds`, `seconds_costs`, and `render_table` for aligned
  plain-text output.
- `cloudadmin.reservations` – `MachineReservationCommands` (`create`, `get`,
  `list`, `update`, `delete`, `apply`, `usage`) and
  `create_request_from_options` / `update_request_from_options`.
- `cloudadmin.projects` – `ProjectCommands` (`create`, `describe`, `delete`,
  `list`, `apply`, `update_from_text`), `annotations_as_map`, `project_id`
  and `read_update_requests`.
- `cloudadmin.tenants` – `TenantCommands` (`describe`, `list`, `apply`,
  `update_from_text`), `tenant_id` and `read_tenant_documents`.
- `cloudadmin.volumes` – `VolumeCommands` for volumes, snapshots and QoS
  policies, and `only_unbound_volumes`.
- `cloudadmin.contexts` – the context configuration file (`Context`,
  `Contexts`, `get_contexts`, `write_contexts`, `default_context`,
  `format_context_name`) and the `Version` record.
- `cloudadmin.identity` – the current user of an ID token (`whoami_lines`),
  client and server versions (`version_info`, raising `VersionInfoError`
  when the server cannot be asked) and `minimum_client_version`.

## Example: listing reservations as a table

```python
from cloudadmin.models import MachineReservation
from cloudadmin.sorters import machine_reservations_sorter
from cloudadmin.tables import machine_reservations_table, render_table

reservations = [
    MachineReservation.from_dict({
        "id": "2", "tenant": "fits", "projectid": "project-b",
        "sizeid": "size-b", "amount": 3,
        "partitionids": ["partition-b", "partition-a"],
        "description": "for machines",
    }),
    MachineReservation.from_dict({
        "id": "1", "tenant": "fits", "projectid": "project-a",
        "sizeid": "size-a", "amount": 3,
        "partitionids": ["partition-a"],
        "description": "for firewalls",
    }),
]

machine_reservations_sorter().sort_by(reservations)
header, rows = machine_reservations_table(reservations, False)
print(render_table(header, rows))
```

`sort_by` sorts the list in place. Without keys it orders reservations by
tenant, project, size and id; pass keys from `parse_sort_keys`
(for example `parse_sort_keys(["amount:desc"])`) to choose another order.

## Example: working with contexts

```python
from cloudadmin.contexts import default_context, format_context_name

ctx = default_context("config.yaml")
print(ctx.api_url)
print(format_context_name("cloudadmin", "prod"))  # cloudadmin-prod
```

If the configuration file cannot be read or names no current context,
`default_context` returns a default pointing at
`http://localhost:8080/cloud`. `write_contexts` writes the file (created
readable by the owner only) and prints which context is now current.

## Confirmation prompts

`VolumeCommands.delete` and `VolumeCommands.snapshot_delete` ask before
deleting unless `assume_yes=True`. By default they ask on the terminal; pass
a `confirm` callable to `VolumeCommands` to decide in code. A refusal raises
`CloudError("aborted")`.

## Errors

Failures reported by the API are raised as `CloudError` or one of its
subclasses. Invalid input – a missing or extra id argument, a malformed
annotation, wrong YAML, an unknown sort key (`SortError`) – raises
`ValueError`.

## What the package does not do

- It has no HTTP client: the `client` objects that talk to the API are
  supplied by the caller.
- It has no command-line program; the command classes are meant to be
  called from your own code.
- It does not download or install newer client versions;
  `minimum_client_version` only reports what the server asks for.
- `whoami_lines` decodes ID tokens without checking their signature.