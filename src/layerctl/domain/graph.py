"""GraphStore — normalized undirected adjacency built from edge declarations.

Input is one declaration per line::

    <vertex_id> <neighbor_id> <neighbor_id> ...

INVARIANT: Adjacency is symmetric. If ``v`` lists ``u``, ``u`` lists ``v``.
INVARIANT: Neighbor tuples are strictly ascending with no self-loops.
INVARIANT: A load is all-or-nothing. A format error leaves the store empty.

Only vertices that take part in at least one edge are stored. A line that
holds a vertex id and nothing else creates no entry.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

type Vertex = int

VERTEX_MIN = -(2**31)
VERTEX_MAX = 2**31 - 1
COMMENT_MARKER = "#"

# ASCII digits only, no underscores.
_INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")
_LEADING_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


@dataclass(frozen=True)
class FormatIssue:
    """A line that does not start with a valid vertex id."""

    line_number: int  # 1-based
    line: str


def parse_vertex(token: str) -> Vertex | None:
    """Parse a single vertex id, or None if *token* is not a 32-bit integer."""
    if _INTEGER_TOKEN.fullmatch(token) is None:
        return None
    value = int(token)
    if not VERTEX_MIN <= value <= VERTEX_MAX:
        return None
    return value


def scan_vertices(line: str) -> Iterator[Vertex]:
    """Yield the vertex ids at the start of *line*, in order.

    Each id is an optionally signed run of ASCII digits after optional
    whitespace. Scanning stops at the first position where no such run
    starts (``"2x 3"`` yields 2 only) or at an id outside the 32-bit range.
    """
    pos = 0
    while True:
        match = _LEADING_INTEGER.match(line, pos)
        if match is None:
            return
        value = int(match.group(1))
        if not VERTEX_MIN <= value <= VERTEX_MAX:
            return
        yield value
        pos = match.end()


def parse_line(line: str) -> tuple[Vertex, list[Vertex]] | None:
    """Split a declaration into ``(vertex, neighbors)``.

    Self-references are dropped and the rest are de-duplicated in ascending
    order. Returns None when the line does not start with a vertex id.
    """
    scanned = scan_vertices(line)
    vertex = next(scanned, None)
    if vertex is None:
        return None
    return vertex, sorted({neighbor for neighbor in scanned if neighbor != vertex})


def is_skippable(line: str) -> bool:
    """Empty lines and ``#`` comments carry no declaration."""
    return not line or line.startswith(COMMENT_MARKER)


class GraphStore:
    """Symmetric adjacency store keyed by vertex id."""

    def __init__(self, log: BoundLogger | None = None) -> None:
        self._log = log or structlog.get_logger(__name__)
        self._adj: dict[Vertex, tuple[Vertex, ...]] = {}

    def __len__(self) -> int:
        return len(self._adj)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._adj

    def reset(self) -> None:
        """Discard all stored adjacency data."""
        self._adj = {}
        self._log.info("graph.reset")

    def build(self, lines: Iterable[str]) -> FormatIssue | None:
        """Replace the store with the graph declared by *lines*.

        Returns None on success, or the first :class:`FormatIssue` met. On
        failure nothing accumulated so far is kept; the store is left empty.
        """
        self.reset()
        scratch: dict[Vertex, set[Vertex]] = {}

        for line_number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            if is_skippable(line):
                continue
            parsed = parse_line(line)
            if parsed is None:
                self._log.error("graph.format_error", line_number=line_number, line=line)
                return FormatIssue(line_number=line_number, line=line)

            vertex, neighbors = parsed
            for neighbor in neighbors:
                scratch.setdefault(vertex, set()).add(neighbor)
                scratch.setdefault(neighbor, set()).add(vertex)

        self._adj = {vertex: tuple(sorted(adj)) for vertex, adj in scratch.items()}

        if not self._adj:
            self._log.warning("graph.empty")
        else:
            self._log.info(
                "graph.loaded", vertices=len(self._adj), edges=self.edge_count()
            )
        return None

    def has_vertex(self, vertex: Vertex) -> bool:
        return vertex in self._adj

    def neighbors_of(self, vertex: Vertex) -> tuple[Vertex, ...]:
        """Ascending neighbors of *vertex*; empty for unknown vertices."""
        return self._adj.get(vertex, ())

    def vertices(self) -> list[Vertex]:
        """All stored vertices in ascending order."""
        return sorted(self._adj)

    def edge_count(self) -> int:
        """Number of undirected edges."""
        return sum(len(adj) for adj in self._adj.values()) // 2

    def adjacency(self) -> Mapping[Vertex, tuple[Vertex, ...]]:
        """Read-only view of the adjacency mapping."""
        return MappingProxyType(self._adj)
