"""GraphService — whole-graph summary metrics via NetworkX.

Uses ``self._workspace.graph.graph`` (triggers the lazy build).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

from layerctl.services.base import BaseService
from layerctl.services.layering import LayeringService
from layerctl.services.result import ServiceResult
from layerctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from pathlib import Path


class GraphService(BaseService):
    """Handles graph summary queries."""

    @traced
    def stats(self, path: Path) -> ServiceResult:
        """Load *path* and report vertex, edge, and degree figures."""
        loaded = LayeringService(self._workspace).load(path)
        if not loaded.ok:
            return loaded.model_copy(update={"op": "stats"})

        with trace_span("build_graph") as span:
            g = self._workspace.graph.graph
            if span:
                span.annotate("nodes", g.number_of_nodes())
                span.annotate("edges", g.number_of_edges())

        if g.number_of_nodes() == 0:
            return ServiceResult(
                ok=True,
                op="stats",
                data={"path": str(path), "vertices": 0, "edges": 0},
                warnings=loaded.warnings,
            )

        degrees = [degree for _, degree in g.degree()]
        return ServiceResult(
            ok=True,
            op="stats",
            data={
                "path": str(path),
                "vertices": g.number_of_nodes(),
                "edges": g.number_of_edges(),
                "min_degree": min(degrees),
                "max_degree": max(degrees),
                "mean_degree": round(sum(degrees) / len(degrees), 4),
                "density": round(nx.density(g), 4),
            },
        )
