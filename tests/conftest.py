"""Shared pytest fixtures and test helpers for layerctl tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from layerctl.config.settings import LayerSettings
from layerctl.domain.graph import GraphStore
from layerctl.infrastructure.workspace import Workspace


@pytest.fixture(autouse=True)
def _no_config_discovery(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a stray layerctl.toml or LAYERCTL_* variable from leaking into tests."""
    monkeypatch.delenv("LAYERCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> LayerSettings:
    return LayerSettings.from_cli()


@pytest.fixture
def workspace(settings: LayerSettings) -> Workspace:
    """Fresh workspace with an empty graph store."""
    return Workspace(settings)


@pytest.fixture
def write_graph(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write graph text to ``tmp_path / name`` and return the path."""

    def _write(text: str, name: str = "graph.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------

SCENARIO_A = "1 2 3\n2 1\n3 1\n4 5\n5 4\n"
SCENARIO_B = "1 2\n2 3\n3 4\n"


def build_store(text: str) -> GraphStore:
    """Build a GraphStore from *text*, asserting the load succeeds."""
    store = GraphStore()
    issue = store.build(text.splitlines())
    assert issue is None, issue
    return store
