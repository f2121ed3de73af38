"""LayeringEngine — BFS distance partition from a start vertex.

INVARIANT: Layer 0 is exactly ``(start,)``.
INVARIANT: Layer keys are contiguous from 0; layer index == shortest-hop distance.
INVARIANT: Every reachable vertex appears in exactly one layer, ascending within it.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from layerctl.domain.graph import GraphStore, Vertex

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

type LayerMap = dict[int, tuple[Vertex, ...]]


@dataclass(frozen=True)
class UnknownStartVertex:
    """The requested start vertex is not in the graph."""

    vertex: Vertex


class LayeringEngine:
    """Computes BFS layers over a :class:`GraphStore`."""

    def __init__(self, log: BoundLogger | None = None) -> None:
        self._log = log or structlog.get_logger(__name__)

    def compute_layers(self, graph: GraphStore, start: Vertex) -> LayerMap | UnknownStartVertex:
        """Partition the component of *start* by hop distance.

        Two frontiers are kept: the one being expanded and the one being
        filled. When the current frontier runs dry the next one takes its
        place and its layer is sorted, since vertices arrive in discovery
        order across several parents.
        """
        if not graph.has_vertex(start):
            self._log.error("layers.unknown_start", start=start)
            return UnknownStartVertex(vertex=start)

        self._log.info("layers.start", start=start)

        visited: set[Vertex] = {start}
        layers: dict[int, list[Vertex]] = {0: [start]}
        current: deque[Vertex] = deque([start])
        following: deque[Vertex] = deque()
        depth = 0

        while True:
            while current:
                vertex = current.popleft()
                for neighbor in graph.neighbors_of(vertex):
                    if neighbor in visited:
                        continue
                    visited.add(neighbor)
                    layers.setdefault(depth + 1, []).append(neighbor)
                    following.append(neighbor)
                    self._log.debug("layers.discovered", vertex=neighbor, layer=depth + 1)

            if not following:
                break
            depth += 1
            current, following = following, current
            layers[depth].sort()

        # Deepest layer must leave sorted however the loop exited.
        layers[depth].sort()

        result: LayerMap = {index: tuple(members) for index, members in layers.items()}
        for index, members in result.items():
            self._log.info("layers.layer", layer=index, count=len(members), vertices=list(members))
        return result
