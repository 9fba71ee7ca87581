from __future__ import annotations

import time
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Any, Callable

from ..config import SiteConfig
from .graph import ImportGraph, build_import_graph
from .layout import check_page_layout, check_shared_layout
from .model import Violation
from .ownership import check_component_ownership, check_cross_page_imports
from .shared import check_shared_imports, check_shared_templates


class ValidationTarget:
    """One project tree plus its import graph, built on first use."""

    def __init__(self, project_root: Path, config: SiteConfig, graph: ImportGraph | None = None) -> None:
        self.project_root = project_root
        self.config = config
        self._graph = graph

    @cached_property
    def graph(self) -> ImportGraph:
        if self._graph is not None:
            return self._graph
        return build_import_graph(self.project_root, self.config.source_dir, self.config.script_extensions)


CheckFunc = Callable[[ValidationTarget], list[Violation]]


@dataclass(frozen=True)
class CheckDef:
    check_id: str
    domain: str
    budget_ms: int
    fn: CheckFunc
    description: str = ""


def _page_layout(target: ValidationTarget) -> list[Violation]:
    return check_page_layout(target.project_root, target.config)


def _shared_layout(target: ValidationTarget) -> list[Violation]:
    return check_shared_layout(target.project_root, target.config)


def _cross_page(target: ValidationTarget) -> list[Violation]:
    return check_cross_page_imports(target.graph, target.config)


def _ownership(target: ValidationTarget) -> list[Violation]:
    return check_component_ownership(target.graph, target.config)


def _shared_isolation(target: ValidationTarget) -> list[Violation]:
    return [
        *check_shared_templates(target.project_root, target.config),
        *check_shared_imports(target.project_root, target.config, target.graph),
    ]


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("structure/page-layout", "structure", 500, _page_layout, "page and layout directories follow the file convention"),
    CheckDef("structure/shared-layout", "structure", 500, _shared_layout, "shared component folders hold only their template"),
    CheckDef("imports/cross-page", "imports", 1000, _cross_page, "pages do not import each other"),
    CheckDef("imports/component-ownership", "imports", 1000, _ownership, "owned components have exactly one in-owner importer"),
    CheckDef("imports/shared-isolation", "imports", 1000, _shared_isolation, "shared components do not depend on pages or the layout"),
)


def domains() -> list[str]:
    return sorted({"all", *{c.domain for c in CHECKS}})


def select_checks(domain: str = "all") -> list[CheckDef]:
    return [c for c in CHECKS if domain == "all" or c.domain == domain]


def run_checks(target: ValidationTarget, checks: list[CheckDef]) -> tuple[list[Violation], list[dict[str, Any]]]:
    violations: list[Violation] = []
    rows: list[dict[str, Any]] = []
    for chk in checks:
        start = time.perf_counter()
        found = chk.fn(target)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        violations.extend(found)
        rows.append(
            {
                "id": chk.check_id,
                "domain": chk.domain,
                "status": "pass" if not found else "fail",
                "duration_ms": elapsed_ms,
                "budget_ms": chk.budget_ms,
                "budget_status": "pass" if elapsed_ms <= chk.budget_ms else "warn",
                "violation_count": len(found),
            }
        )
    return violations, rows
