from __future__ import annotations

import os
import random
from typing import TYPE_CHECKING

import pytest

random.seed(42)  # Fully deterministic random output


def pytest_report_header(config: pytest.Config) -> list[str]:
    headers: list[str] = []
    addopts: str = os.environ.get("PYTEST_ADDOPTS", "")
    if addopts:
        headers.append(f"PYTEST_ADDOPTS: {addopts}")
    return headers


PYTEST_PLUGINS_PACKAGE = f"{__package__}.pytest_plugins"


pytest_plugins = [
    f"{PYTEST_PLUGINS_PACKAGE}.auto_markers",
]

if TYPE_CHECKING:
    # Import pytest plugins so Pylance can suggest defined fixtures

    from .pytest_plugins import auto_markers as auto_markers  # noqa: F401
