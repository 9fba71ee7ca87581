from __future__ import annotations

from .validate import load_catalog, schema_path, validate

__all__ = ["load_catalog", "schema_path", "validate"]
