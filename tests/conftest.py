"""Shared test fixtures for specview.

Provides the fixture documents (one per supported grammar), an isolated
working directory for option resolution, and output state management.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from specview.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict[str, Any]:
    """Load a fixture document as a fresh dict."""
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _clean_specview_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SPECVIEW_* variables from the developer's shell out of tests."""
    for var in ("SPECVIEW_CLASS_NAME", "SPECVIEW_MODULE_NAME", "SPECVIEW_TARGET"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def swagger2_doc() -> dict[str, Any]:
    """Swagger 2.0 petstore document."""
    return load_fixture("petstore_2.0.json")


@pytest.fixture
def openapi3_doc() -> dict[str, Any]:
    """OpenAPI 3.0 users document."""
    return load_fixture("users_3.0.json")


@pytest.fixture
def legacy_doc() -> dict[str, Any]:
    """Swagger 1.2 legacy document."""
    return load_fixture("legacy_1.2.json")


@pytest.fixture
def swagger2_path() -> Path:
    return FIXTURES_DIR / "petstore_2.0.json"


@pytest.fixture
def openapi3_path() -> Path:
    return FIXTURES_DIR / "users_3.0.json"


@pytest.fixture
def legacy_path() -> Path:
    return FIXTURES_DIR / "legacy_1.2.json"


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory so no specview.json is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path

