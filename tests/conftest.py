"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

CATALOG_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<credits>
{body}
</credits>
"""


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the directory holding the test fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def credits_path() -> Path:
    """Return the sample catalog: 7 credits, 2 of them forced."""
    return FIXTURES_DIR / "credits.xml"


@pytest.fixture
def dependencies_path() -> Path:
    """Return the sample dependency list."""
    return FIXTURES_DIR / "dependencies.txt"


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper writing a catalog whose root holds ``body``."""

    def _write(body: str, name: str = "credits.xml") -> Path:
        path = tmp_path / name
        path.write_text(CATALOG_TEMPLATE.format(body=body), encoding="utf-8")
        return path

    return _write
