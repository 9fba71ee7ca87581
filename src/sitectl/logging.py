"""Structured event logging to stderr."""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core.context import RunContext

_LEVELS = ("debug", "info", "warn", "error")


def _enabled(ctx: RunContext, level: str) -> bool:
    if ctx.quiet:
        return level == "error"
    if level == "debug":
        return ctx.verbose
    return True


def log_event(ctx: RunContext, level: str, component: str, action: str, **fields: object) -> None:
    if level not in _LEVELS:
        raise ValueError(f"unknown log level `{level}`")
    if not _enabled(ctx, level):
        return
    payload: dict[str, object] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "run_id": ctx.run_id,
        "component": component,
        "action": action,
        **fields,
    }
    if ctx.log_json:
        sys.stderr.write(json.dumps(payload, sort_keys=True, default=str) + "\n")
        return
    core = f"level={level} run_id={ctx.run_id} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    sys.stderr.write((core if not extras else f"{core} {extras}") + "\n")
