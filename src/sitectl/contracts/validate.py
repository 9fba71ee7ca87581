from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_INPUT, ERR_INTERNAL


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    version: int
    file: str


def schemas_root() -> Path:
    return Path(__file__).resolve().parent / "schemas"


@lru_cache(maxsize=1)
def load_catalog() -> dict[str, CatalogEntry]:
    raw = json.loads((schemas_root() / "catalog.json").read_text(encoding="utf-8"))
    entries: dict[str, CatalogEntry] = {}
    for row in raw.get("schemas", []):
        entry = CatalogEntry(name=row["name"], version=int(row["version"]), file=row["file"])
        entries[entry.name] = entry
    return entries


def schema_path(schema_name: str) -> Path:
    entry = load_catalog().get(schema_name)
    if entry is None:
        raise ScriptError(f"unknown schema: {schema_name}", ERR_INTERNAL)
    return schemas_root() / entry.file


@lru_cache(maxsize=None)
def _load_schema(schema_name: str) -> dict[str, Any]:
    return json.loads(schema_path(schema_name).read_text(encoding="utf-8"))


def validate(schema_name: str, payload: Any, *, code: int = ERR_INPUT, source: str = "") -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        where = f" ({source})" if source else ""
        raise ScriptError(
            f"schema validation failed for {schema_name}{where} at {loc}: {exc.message}",
            code,
            "schema_error",
        ) from exc
