"""sitectl: manifest-driven asset tags and project structure checks for static sites."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
