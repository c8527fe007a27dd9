"""Commands that manage volumes, snapshots and quality-of-service policies."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Protocol, Sequence

from cloudadmin.errors import CloudError


class VolumeClient(Protocol):
    """The part of the cloud API used for volumes and snapshots."""

    def find_volumes(self, body: dict[str, Any]) -> list[dict[str, Any]]: ...

    def list_volumes(self) -> list[dict[str, Any]]: ...

    def get_volume(self, volume_id: str) -> dict[str, Any]: ...

    def delete_volume(self, volume_id: str) -> dict[str, Any]: ...

    def set_volume_qos_policy(self, volume_id: str, body: dict[str, Any]) -> dict[str, Any]: ...

    def cluster_info(self, partition: str | None) -> list[dict[str, Any]]: ...

    def get_snapshot(self, snapshot_id: str, project_id: str | None) -> dict[str, Any]: ...

    def find_snapshots(self, body: dict[str, Any]) -> list[dict[str, Any]]: ...

    def delete_snapshot(self, snapshot_id: str, project_id: str | None) -> dict[str, Any]: ...

    def list_policies(self) -> list[dict[str, Any]]: ...


def _prompt(message: str) -> bool:
    """Print ``message`` and ask for confirmation on the terminal."""
    print(message)
    answer = input("Are you sure? (y/n) ")
    return answer.strip() == "y"


def _non_empty(**values: str | None) -> dict[str, str]:
    return {key: value for key, value in values.items() if value}


def _exactly_one(args: Sequence[str]) -> str:
    if not args:
        raise ValueError("no argument given")
    if len(args) > 1:
        raise ValueError(f"too many arguments given ({len(args)})")
    return args[0]


def only_unbound_volumes(volumes: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Return the volumes that are not connected to any host."""
    return [volume for volume in volumes if not volume.get("connectedhosts")]


class VolumeCommands:
    """List, inspect and delete volumes and snapshots through the API."""

    def __init__(self, client: VolumeClient, confirm: Callable[[str], bool] | None = None) -> None:
        self.client = client
        self.confirm = confirm or _prompt

    def _ask(self, message: str) -> None:
        if not self.confirm(message):
            raise CloudError("aborted")

    def find(
        self,
        volume_id: str = "",
        project: str = "",
        partition: str = "",
        tenant: str = "",
        only_unbound: bool = False,
    ) -> list[dict[str, Any]]:
        """List all volumes, or those matching any given filter."""
        body = _non_empty(
            volumeid=volume_id, projectid=project, partitionid=partition, tenantid=tenant
        )
        volumes = list(self.client.find_volumes(body) if body else self.client.list_volumes())
        if only_unbound:
            volumes = only_unbound_volumes(volumes)
        return volumes

    def _volume_from_args(self, args: Sequence[str]) -> dict[str, Any]:
        if not args:
            raise ValueError("no volume given")
        return self.client.get_volume(args[0])

    def describe(self, args: Sequence[str]) -> dict[str, Any]:
        return self._volume_from_args(args)

    def delete(self, args: Sequence[str], assume_yes: bool = False) -> dict[str, Any]:
        """Delete a volume that is not connected to any host, asking first unless told not to."""
        volume = self._volume_from_args(args)
        hosts = volume.get("connectedhosts") or []
        if hosts:
            raise CloudError(f"volume is still connected to this node:[{' '.join(hosts)}]")
        volume_id = volume.get("volumeid") or ""
        if not assume_yes:
            self._ask(
                f'\ndelete volume: "{volume_id}", all data will be lost forever.\n'
                "If used in cronjob for example, volume might not be connected now, "
                "but required at a later point in time.\n"
            )
        return self.client.delete_volume(volume_id)

    def set_qos(self, args: Sequence[str], qos_id: str = "", qos_name: str = "") -> dict[str, Any]:
        """Set the quality-of-service policy of a volume by policy id or by name."""
        volume_id = _exactly_one(args)
        if not qos_id and not qos_name:
            raise ValueError("either qos-id or qos-name must be specified")
        if qos_id and qos_name:
            raise ValueError("either qos-id or qos-name must be specified, not both")
        body = _non_empty(qospolicyid=qos_id, qospolicyname=qos_name)
        return self.client.set_volume_qos_policy(volume_id, body)

    def cluster_info(self, partition: str = "") -> list[dict[str, Any]]:
        return self.client.cluster_info(partition or None)

    def snapshot_find(
        self, snapshot_id: str = "", project: str = "", name: str = "", partition: str = ""
    ) -> list[dict[str, Any]]:
        body = _non_empty(
            snapshotid=snapshot_id, projectid=project, name=name, partitionid=partition
        )
        return self.client.find_snapshots(body)

    def _snapshot_from_args(self, args: Sequence[str], project: str) -> dict[str, Any]:
        if not args:
            raise ValueError("no snapshot given")
        return self.client.get_snapshot(args[0], project or None)

    def snapshot_describe(self, args: Sequence[str], project: str = "") -> dict[str, Any]:
        return self._snapshot_from_args(args, project)

    def snapshot_delete(
        self, args: Sequence[str], project: str = "", assume_yes: bool = False
    ) -> dict[str, Any]:
        """Delete a snapshot, asking first unless told not to."""
        snapshot = self._snapshot_from_args(args, project)
        snapshot_id = snapshot.get("snapshotid") or ""
        if not assume_yes:
            self._ask(f'\ndelete snapshot: "{snapshot_id}", all data will be lost forever.\n')
        return self.client.delete_snapshot(snapshot_id, project or None)

    def list_qos_policies(self) -> list[dict[str, Any]]:
        return self.client.list_policies()