from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import settings

from helpers import make_site

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("sitectl", deadline=None, max_examples=200)
settings.load_profile("sitectl")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    return make_site(tmp_path / "site")
