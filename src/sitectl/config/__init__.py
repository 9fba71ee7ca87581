from __future__ import annotations

from .loader import load_config
from .model import SiteConfig

__all__ = ["SiteConfig", "load_config"]
