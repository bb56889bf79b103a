"""Shared test fixtures for ramlobject.

Provides the example descriptions used across test modules and keeps the
global output state isolated between tests.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from ramlobject.interface import RamlObject
from ramlobject.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def example_raw() -> dict[str, Any]:
    """Load the raw example description dict."""
    with open(FIXTURES_DIR / "example_api.json") as f:
        return json.load(f)


@pytest.fixture
def example_api(example_raw: dict[str, Any]) -> RamlObject:
    """A RamlObject built from the example description."""
    return RamlObject(example_raw)
