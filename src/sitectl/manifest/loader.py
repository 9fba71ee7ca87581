from __future__ import annotations

import json
from pathlib import Path

from ..contracts import validate
from ..errors import ScriptError
from ..exit_codes import ERR_INPUT
from .model import Manifest


def load_manifest(path: Path) -> Manifest:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScriptError(f"unable to read manifest {path}: {exc}", ERR_INPUT, "input_error") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ScriptError(f"manifest {path} is not valid JSON: {exc}", ERR_INPUT, "input_error") from exc
    validate("manifest", payload, source=str(path))
    return Manifest.from_payload(payload)
