from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from ..contracts import validate
from ..core.paths import CONFIG_FILENAME
from ..core.yaml_utils import load_yaml
from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG
from .model import SiteConfig

PUBLIC_PATH_ENV = "SITECTL_PUBLIC_PATH"


def _coerce(raw: Mapping[str, Any]) -> dict[str, Any]:
    values = dict(raw)
    if "script_extensions" in values:
        values["script_extensions"] = tuple(values["script_extensions"])
    if "page_titles" in values:
        values["page_titles"] = dict(values["page_titles"])
    for key in ("source_dir", "pages_dir", "layout_dir", "shared_dir", "out_dir", "manifest"):
        if key in values:
            values[key] = str(values[key]).replace("\\", "/").strip("/")
    return values


def load_config(project_root: Path, env: Mapping[str, str] | None = None) -> SiteConfig:
    path = project_root / CONFIG_FILENAME
    values: dict[str, Any] = {}
    if path.is_file():
        raw = load_yaml(path)
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ScriptError(f"{path}: root must be a mapping", ERR_CONFIG, "config_error")
        validate("config", raw, code=ERR_CONFIG, source=str(path))
        values = _coerce(raw)
    public_path = (env or {}).get(PUBLIC_PATH_ENV)
    if public_path:
        values["public_path"] = public_path
    return SiteConfig(**values)
