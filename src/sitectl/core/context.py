from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, Mapping

from ..config import SiteConfig, load_config
from .paths import find_project_root

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    project_root: Path
    config: SiteConfig
    output_format: OutputFormat = "text"
    verbose: bool = False
    quiet: bool = False
    log_json: bool = False

    @classmethod
    def from_args(
        cls,
        project_root: str | Path | None,
        run_id: str | None = None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> "RunContext":
        environ = os.environ if env is None else env
        root = Path(project_root).resolve() if project_root else find_project_root()
        default_run = f"site-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        return cls(
            run_id=run_id or environ.get("RUN_ID", default_run),
            project_root=root,
            config=load_config(root, environ),
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
        )
