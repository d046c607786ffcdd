from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.catalog_builder import CatalogBuilder


@pytest.fixture
def catalog(tmp_path: Path) -> CatalogBuilder:
    """Provide a reusable module catalog rooted at the pytest tmp_path."""
    return CatalogBuilder(tmp_path)
