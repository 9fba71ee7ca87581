from __future__ import annotations

from .graph import build_import_graph, load_import_graph
from .model import ValidationReport, Violation, ViolationKind
from .validator import validate

__all__ = [
    "ValidationReport",
    "Violation",
    "ViolationKind",
    "build_import_graph",
    "load_import_graph",
    "validate",
]
