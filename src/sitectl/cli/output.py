"""CLI payload output helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dumps_json(payload: Any, *, pretty: bool) -> str:
    if pretty:
        return json.dumps(payload, indent=2, sort_keys=True)
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


def emit(payload: dict[str, Any], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def write_payload(out_file: str | None, payload: dict[str, Any]) -> None:
    if not out_file:
        return
    path = Path(out_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_json(payload, pretty=True) + "\n", encoding="utf-8")


def resolve_output_format(*, cli_json: bool, cli_format: str | None) -> str:
    if cli_json:
        return "json"
    return cli_format or "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error") -> str:
    if as_json:
        return dumps_json(
            {
                "schema_version": 1,
                "tool": "sitectl",
                "status": "error",
                "errors": [{"code": code, "kind": kind, "message": message}],
            },
            pretty=False,
        )
    return message
