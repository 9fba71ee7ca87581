from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class ViolationKind(str, Enum):
    MISSING_FILES = "missing_files"
    EXTRA_FILES = "extra_files"
    STRAY_COMPONENT_FILE = "stray_component_file"
    CROSS_PAGE_IMPORT = "cross_page_import"
    FOREIGN_COMPONENT_IMPORT = "foreign_component_import"
    COMPONENT_REUSED = "component_reused"
    SHARED_TEMPLATE_INCLUDE = "shared_template_include"
    SHARED_EXTERNAL_IMPORT = "shared_external_import"


@dataclass(frozen=True)
class Violation:
    kind: ViolationKind
    message: str
    paths: tuple[str, ...] = ()
    filenames: tuple[str, ...] = ()
    hint: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ViolationKind(self.kind))
        object.__setattr__(self, "paths", tuple(str(p) for p in self.paths))
        object.__setattr__(self, "filenames", tuple(str(f) for f in self.filenames))

    def to_payload(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "paths": list(self.paths),
            "filenames": list(self.filenames),
            "hint": self.hint,
        }


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of one validation run; an empty report means the tree passed."""

    violations: tuple[Violation, ...] = ()
    checks: tuple[Mapping[str, Any], ...] = field(default=(), compare=False)

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def count(self) -> int:
        return len(self.violations)

    def by_kind(self, kind: ViolationKind | str) -> list[Violation]:
        wanted = ViolationKind(kind)
        return [item for item in self.violations if item.kind is wanted]

    def to_payload(self) -> dict[str, Any]:
        return {
            "schema_version": 1,
            "tool": "sitectl",
            "kind": "structure-report",
            "status": "pass" if self.ok else "fail",
            "violation_count": self.count,
            "violations": [item.to_payload() for item in self.violations],
            "checks": [dict(row) for row in self.checks],
        }
