"""Commands that manage projects."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Iterable, Protocol, Sequence

import yaml

from cloudadmin.errors import CloudError


class ProjectClient(Protocol):
    """The part of the cloud API used for projects."""

    def create_project(self, body: dict[str, Any]) -> dict[str, Any]: ...

    def find_project(self, project_id: str) -> dict[str, Any] | None: ...

    def delete_project(self, project_id: str) -> dict[str, Any]: ...

    def find_projects(self, body: dict[str, Any]) -> dict[str, Any]: ...

    def list_projects(self) -> dict[str, Any]: ...

    def update_project(self, body: dict[str, Any]) -> dict[str, Any]: ...


def annotations_as_map(annotations: Iterable[str]) -> dict[str, str]:
    """Turn ``key=value`` strings into a mapping."""
    result: dict[str, str] = {}
    for annotation in annotations:
        parts = annotation.strip().split("=")
        if len(parts) != 2:
            raise ValueError(f"given annotation {annotation} does not contain exactly one =")
        key, value = parts
        result[key] = value
    return result


def project_id(verb: str, args: Sequence[str]) -> str:
    """Return the single project id given in ``args``."""
    if not args:
        raise ValueError(f"project {verb} requires projectID as argument")
    if len(args) == 1:
        return args[0]
    raise ValueError(f"project {verb} requires exactly one projectID as argument")


def _read_documents(text: str) -> list[dict[str, Any]]:
    try:
        documents = [doc for doc in yaml.safe_load_all(text) if doc is not None]
    except yaml.YAMLError as err:
        raise ValueError(f"unable to parse yaml: {err}") from err
    for doc in documents:
        if not isinstance(doc, dict):
            raise ValueError("every yaml document must be a mapping")
    return documents


def read_update_requests(text: str) -> list[dict[str, Any]]:
    """Parse YAML holding exactly one project update request."""
    requests = _read_documents(text)
    if len(requests) != 1:
        raise ValueError(
            f"project update error more or less than one project given:{len(requests)}"
        )
    return requests


def _update_request_from(create_request: dict[str, Any]) -> dict[str, Any]:
    update: dict[str, Any] = {}
    for key in ("description", "name", "tenant_id"):
        if create_request.get(key):
            update[key] = create_request[key]
    for key in ("quotas", "meta"):
        if create_request.get(key) is not None:
            update[key] = create_request[key]
    return update


class ProjectCommands:
    """Create, read, update and delete projects through the API."""

    def __init__(self, client: ProjectClient) -> None:
        self.client = client

    def create(
        self,
        name: str,
        description: str = "",
        tenant: str = "",
        labels: Iterable[str] | None = None,
        annotations: Iterable[str] | None = None,
        cluster_quota: int | None = None,
        machine_quota: int | None = None,
        ip_quota: int | None = None,
    ) -> dict[str, Any]:
        """Create a project; quotas left as ``None`` are not set."""
        quotas = {
            kind: {"quota": value}
            for kind, value in (
                ("cluster", cluster_quota),
                ("machine", machine_quota),
                ("ip", ip_quota),
            )
            if value is not None
        }
        body = {
            "name": name,
            "description": description,
            "tenant_id": tenant,
            "quotas": quotas,
            "meta": {
                "kind": "Project",
                "apiversion": "v1",
                "annotations": annotations_as_map(annotations or []),
                "labels": list(labels or []),
            },
        }
        return self.client.create_project(body)

    def describe(self, args: Sequence[str]) -> dict[str, Any] | None:
        return self.client.find_project(project_id("describe", args))

    def delete(self, args: Sequence[str]) -> dict[str, Any]:
        return self.client.delete_project(project_id("delete", args))

    def list(
        self, project_id: str = "", name: str = "", tenant: str = ""
    ) -> list[dict[str, Any]]:
        """List all projects, or those matching any given filter."""
        if project_id or name or tenant:
            body = {
                key: value
                for key, value in (("id", project_id), ("name", name), ("tenant_id", tenant))
                if value
            }
            response = self.client.find_projects(body)
        else:
            response = self.client.list_projects()
        return list((response or {}).get("projects") or [])

    def _find_existing(self, identifier: str) -> dict[str, Any] | None:
        try:
            return self.client.find_project(identifier)
        except CloudError as err:
            if err.status != HTTPStatus.NOT_FOUND:
                raise
            return None

    def apply(self, text: str) -> list[dict[str, Any]]:
        """Create the projects in the YAML documents, updating those that exist."""
        results = []
        for request in _read_documents(text):
            meta = request.get("meta")
            if not isinstance(meta, dict):
                raise ValueError("project meta is not defined")
            existing = self._find_existing(meta.get("id") or "")
            if existing is None:
                results.append(self.client.create_project(request))
                continue
            if existing.get("meta") is not None:
                results.append(self.client.update_project(_update_request_from(request)))
        return results

    def update_from_text(self, text: str) -> dict[str, Any]:
        """Update a project from YAML holding exactly one update request."""
        request = read_update_requests(text)[0]
        return self.client.update_project(request)