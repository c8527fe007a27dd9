"""Configuration contexts and version information."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cloudadmin.errors import CloudError

CLOUD_CONTEXT = "cloudadmin"


@dataclass
class Context:
    """Connection settings for one cloud API."""

    api_url: str = ""
    issuer_url: str = ""
    issuer_type: str = ""
    custom_scopes: str = ""
    client_id: str = ""
    client_secret: str = ""
    hmac: str | None = None


@dataclass
class Contexts:
    """All configured contexts and which of them is active."""

    current_context: str = ""
    previous_context: str = ""
    contexts: dict[str, Context] = field(default_factory=dict)


@dataclass
class Version:
    """Client and server version information."""

    client: str
    server: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"client": self.client}
        if self.server is not None:
            result["server"] = self.server
        return result


DEFAULT_CONTEXT = Context(
    api_url="http://localhost:8080/cloud",
    issuer_url="http://localhost:8080/",
)

# Keys in the configuration file whose names match the Context attributes.
_SAME_NAMED_FIELDS = (
    "issuer_url",
    "issuer_type",
    "custom_scopes",
    "client_id",
    "client_secret",
    "hmac",
)

_CONTEXT_FIELDS = {"url": "api_url", **{name: name for name in _SAME_NAMED_FIELDS}}


def _context_from_dict(data: dict[str, Any] | None) -> Context:
    data = data or {}
    values = {attr: data[key] for key, attr in _CONTEXT_FIELDS.items() if data.get(key) is not None}
    return Context(**values)


def _context_to_dict(ctx: Context) -> dict[str, Any]:
    return {key: getattr(ctx, attr) for key, attr in _CONTEXT_FIELDS.items()}


def get_contexts(path: str | os.PathLike[str]) -> Contexts:
    """Read all contexts from the configuration file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as err:
        raise CloudError(
            f"unable to read config {path}, please create a config.yaml, "
            "see the ctx command help for examples"
        ) from err
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as err:
        raise CloudError(f"unable to parse config {path}: {err}") from err
    if not isinstance(data, dict):
        raise CloudError(f"unable to parse config {path}: not a mapping")
    return Contexts(
        current_context=data.get("current") or "",
        previous_context=data.get("previous") or "",
        contexts={
            str(name): _context_from_dict(ctx) for name, ctx in (data.get("contexts") or {}).items()
        },
    )


def write_contexts(contexts: Contexts, path: str | os.PathLike[str]) -> None:
    """Write all contexts to ``path``, readable by the owner only when created."""
    document = {
        "current": contexts.current_context,
        "previous": contexts.previous_context,
        "contexts": {name: _context_to_dict(ctx) for name, ctx in contexts.contexts.items()},
    }
    text = yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(text)
    print(f'✔ switched context to "{contexts.current_context}"')


def default_context(path: str | os.PathLike[str]) -> Context:
    """Return the active context, or the built-in default if there is none."""
    try:
        contexts = get_contexts(path)
    except CloudError:
        return DEFAULT_CONTEXT
    return contexts.contexts.get(contexts.current_context, DEFAULT_CONTEXT)


def format_context_name(prefix: str, suffix: str) -> str:
    """Return the kubeconfig context name for the given suffix, which may be empty."""
    if suffix:
        return f"{CLOUD_CONTEXT}-{suffix}"
    return prefix