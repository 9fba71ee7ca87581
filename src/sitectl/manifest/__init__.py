from __future__ import annotations

from .loader import load_manifest
from .model import Chunk, Manifest

__all__ = ["Chunk", "Manifest", "load_manifest"]
