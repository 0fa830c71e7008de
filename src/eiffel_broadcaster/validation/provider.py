"""Validation – sources of JSON schema documents."""
from __future__ import annotations

import json
from importlib import resources
from typing import Any, Protocol


class SchemaProvider(Protocol):
    """Port: return the schema document for an event type and version, or ``None``."""

    def get_schema(self, event_type: str, event_version: str) -> dict[str, Any] | None: ...


class BundledSchemaProvider:
    """Reads the schemas shipped in ``eiffel_broadcaster/validation/schemas``.

    Layout: ``schemas/<event type>/<event version>.json``.
    """

    def __init__(self, package: str = "eiffel_broadcaster.validation", directory: str = "schemas") -> None:
        self._root = resources.files(package).joinpath(directory)

    def get_schema(self, event_type: str, event_version: str) -> dict[str, Any] | None:
        if not _is_safe_segment(event_type) or not _is_safe_segment(event_version):
            return None
        resource = self._root.joinpath(event_type).joinpath(f"{event_version}.json")
        if not resource.is_file():
            return None
        return json.loads(resource.read_text(encoding="utf-8"))

    def available(self) -> list[tuple[str, str]]:
        """All bundled ``(event type, version)`` pairs."""
        pairs: list[tuple[str, str]] = []
        for type_dir in self._root.iterdir():
            if not type_dir.is_dir():
                continue
            for schema in type_dir.iterdir():
                if schema.name.endswith(".json"):
                    pairs.append((type_dir.name, schema.name[: -len(".json")]))
        return sorted(pairs)


def _is_safe_segment(value: str) -> bool:
    return bool(value) and "/" not in value and "\\" not in value and value not in (".", "..")


__all__ = ["BundledSchemaProvider", "SchemaProvider"]
