"""Commands that manage tenants."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Protocol, Sequence

import yaml

from cloudadmin.errors import CloudError

_UPDATE_FIELDS = ("default_quotas", "description", "iam_config", "meta", "name", "quotas")


class TenantClient(Protocol):
    """The part of the cloud API used for tenants."""

    def get_tenant(self, tenant_id: str) -> dict[str, Any] | None: ...

    def list_tenants(self) -> list[dict[str, Any]]: ...

    def find_tenants(self, body: dict[str, Any]) -> list[dict[str, Any]]: ...

    def update_tenant(self, body: dict[str, Any]) -> dict[str, Any]: ...


def tenant_id(verb: str, args: Sequence[str]) -> str:
    """Return the single tenant id given in ``args``."""
    if not args:
        raise ValueError(f"tenant {verb} requires tenantID as argument")
    if len(args) == 1:
        return args[0]
    raise ValueError(f"tenant {verb} requires exactly one tenantID as argument")


def read_tenant_documents(text: str) -> list[dict[str, Any]]:
    """Parse every non-empty YAML document in ``text`` as a tenant."""
    try:
        documents = [doc for doc in yaml.safe_load_all(text) if doc is not None]
    except yaml.YAMLError as err:
        raise ValueError(f"unable to parse yaml: {err}") from err
    for doc in documents:
        if not isinstance(doc, dict):
            raise ValueError("every yaml document must be a mapping")
    return documents


def _update_request(tenant: dict[str, Any]) -> dict[str, Any]:
    return {key: tenant[key] for key in _UPDATE_FIELDS if tenant.get(key) is not None}


class TenantCommands:
    """Read and update tenants through the API."""

    def __init__(self, client: TenantClient) -> None:
        self.client = client

    def describe(self, args: Sequence[str]) -> dict[str, Any] | None:
        identifier = tenant_id("edit", args)
        try:
            return self.client.get_tenant(identifier)
        except CloudError as err:
            raise CloudError(f"tenant describe error:{err}", err.status) from err

    def list(self, tenant_id: str = "", name: str = "") -> list[dict[str, Any]]:
        """List all tenants, or those matching any given filter."""
        if tenant_id or name:
            body = {key: value for key, value in (("id", tenant_id), ("name", name)) if value}
            return list(self.client.find_tenants(body) or [])
        try:
            return list(self.client.list_tenants() or [])
        except CloudError as err:
            raise CloudError(f"tenant list error:{err}", err.status) from err

    def _find_existing(self, identifier: str) -> dict[str, Any] | None:
        try:
            return self.client.get_tenant(identifier)
        except CloudError as err:
            if err.status != HTTPStatus.NOT_FOUND:
                raise
            return None

    def apply(self, text: str) -> list[dict[str, Any]]:
        """Update the tenants in the YAML documents; creating tenants is not supported."""
        results = []
        for document in read_tenant_documents(text):
            meta = document.get("meta")
            if not isinstance(meta, dict):
                raise ValueError("tenant meta is not defined")
            existing = self._find_existing(meta.get("id") or "")
            if existing is None:
                raise CloudError("only tenant update is supported")
            if existing.get("meta") is not None:
                results.append(self.client.update_tenant(_update_request(document)))
        return results

    def update_from_text(self, text: str) -> dict[str, Any]:
        """Update a tenant from YAML holding exactly one tenant."""
        documents = read_tenant_documents(text)
        if len(documents) != 1:
            raise ValueError(
                f"tenant update error more or less than one tenant given:{len(documents)}"
            )
        return self.client.update_tenant(_update_request(documents[0]))