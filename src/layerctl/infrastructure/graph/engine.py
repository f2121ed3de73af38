"""GraphEngine — lazy-built NetworkX view over a GraphStore.

Rebuilt after every load, no cross-invocation cache. Only commands that
need whole-graph metrics ever build it; layering works on the store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from layerctl.domain.graph import GraphStore

type _Graph = nx.Graph


class GraphEngine:
    """Lazy-loading undirected NetworkX graph backed by a GraphStore."""

    def __init__(self, store: GraphStore) -> None:
        self._store = store
        self._graph: _Graph | None = None

    @property
    def graph(self) -> _Graph:
        """Return the graph, building from the store on first access."""
        if self._graph is None:
            self._graph = self._build_from_store()
        return self._graph

    def invalidate(self) -> None:
        """Clear the cached graph, forcing rebuild on next access."""
        self._graph = None

    def _build_from_store(self) -> _Graph:
        """Build an undirected graph from the store's adjacency.

        Each undirected edge is listed twice in the store; NetworkX
        collapses the pair into one edge.
        """
        g: _Graph = nx.Graph()
        for vertex, neighbors in self._store.adjacency().items():
            g.add_node(vertex)
            g.add_edges_from((vertex, neighbor) for neighbor in neighbors)
        return g
