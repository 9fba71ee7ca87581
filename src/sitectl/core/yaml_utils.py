from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG


def load_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except OSError as exc:
        raise ScriptError(f"unable to read {path}: {exc}", ERR_CONFIG, "config_error") from exc
    except yaml.YAMLError as exc:
        raise ScriptError(f"{path}: invalid YAML: {exc}", ERR_CONFIG, "config_error") from exc
