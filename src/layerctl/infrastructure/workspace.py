"""Workspace — the single dependency injected into every service.

Owns the loaded :class:`GraphStore`, its lazy :class:`GraphEngine` view, and
the settings that shape reports. Loading replaces the store contents wholesale
and invalidates the engine so metrics never describe a stale graph.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from layerctl.domain.graph import FormatIssue, GraphStore
from layerctl.domain.layering import LayeringEngine
from layerctl.infrastructure.files import read_graph_lines
from layerctl.infrastructure.graph.engine import GraphEngine

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from layerctl.config.settings import LayerSettings


class Workspace:
    """Graph store, layering engine, and settings for one CLI invocation."""

    def __init__(self, settings: LayerSettings) -> None:
        self.settings = settings
        self.store = GraphStore(log=structlog.get_logger("layerctl.graph"))
        self.layering = LayeringEngine(log=structlog.get_logger("layerctl.layers"))
        self._engine = GraphEngine(self.store)

    @property
    def graph(self) -> GraphEngine:
        """NetworkX view of the currently loaded graph."""
        return self._engine

    def read(self, path: Path) -> list[str]:
        """Empty the store, then read the declaration lines of *path*.

        The store is emptied before the file is opened, so a failed read
        leaves no graph behind.

        Raises:
            OSError: If the file cannot be opened or read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        self.store.reset()
        self._engine.invalidate()
        return read_graph_lines(path)

    def build(self, lines: Iterable[str]) -> FormatIssue | None:
        """Rebuild the store from *lines*."""
        self._engine.invalidate()
        return self.store.build(lines)
