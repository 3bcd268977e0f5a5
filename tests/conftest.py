"""
Pytest configuration for the viessmann-sdk test suite.

Tests import `viessmann_sdk` normally. To make that work in a fresh checkout
without an editable install, the local `src` directory is added to `sys.path`.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ENV_VARS = (
    "VIESSMANN_IAM_BASE_URL",
    "VIESSMANN_API_BASE_URL",
    "VIESSMANN_TIMEOUT_SECONDS",
    "VIESSMANN_SSL_VERIFY",
    "VIESSMANN_LOG_LEVEL",
    "VIESSMANN_TOKEN",
)


def pytest_configure() -> None:
    """
    Ensure the local `viessmann_sdk` package is importable for tests.
    """
    project_root = Path(__file__).resolve().parent.parent
    src = project_root / "src"

    if src.is_dir():
        # Prepend so local sources win over any globally installed package.
        sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def _clean_viessmann_env(monkeypatch) -> None:
    """Run every test against the default endpoints, whatever the shell or .env sets."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
