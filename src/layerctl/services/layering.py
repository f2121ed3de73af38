"""LayeringService — load a graph, compute BFS layers, write the report.

Each public method is one CLI operation and returns a ServiceResult.
Failures map onto :class:`~layerctl.domain.types.ErrorCode`:

- ``INPUT_ACCESS``: the input file cannot be opened or decoded.
- ``FORMAT_ERROR``: a line has no leading vertex id; nothing is loaded.
- ``UNKNOWN_START_VERTEX``: the start vertex is not in the loaded graph.
- ``OUTPUT_ACCESS`` / ``TEMPLATE_ERROR``: raised through ReportService.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from layerctl.domain.graph import FormatIssue
from layerctl.domain.layering import LayerMap, UnknownStartVertex
from layerctl.domain.types import ErrorCode
from layerctl.services.base import BaseService
from layerctl.services.report import ReportService
from layerctl.services.result import ServiceResult
from layerctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from pathlib import Path

    from layerctl.config.models import ReportConfig


def layers_payload(layer_map: LayerMap) -> list[dict[str, Any]]:
    """Serialize a LayerMap as an index-ordered list of layer dicts."""
    return [
        {"index": index, "count": len(members), "vertices": list(members)}
        for index, members in sorted(layer_map.items())
    ]


class LayeringService(BaseService):
    """Graph loading and BFS layering over the workspace store."""

    @traced
    def load(self, path: Path) -> ServiceResult:
        """Replace the workspace graph with the one declared in *path*."""
        failure = self._load(path, op="load_graph")
        if failure is not None:
            return failure

        store = self._workspace.store
        warnings = [] if len(store) else [f"Graph is empty after loading {path}"]
        return ServiceResult(
            ok=True,
            op="load_graph",
            data={
                "path": str(path),
                "vertices": len(store),
                "edges": store.edge_count(),
                "empty": not len(store),
            },
            warnings=warnings,
        )

    @traced
    def layers(self, path: Path, start: int) -> ServiceResult:
        """Load *path* and layer it from *start* without writing a report."""
        failure = self._load(path, op="layers")
        if failure is not None:
            return failure

        outcome = self._layer_map(start, op="layers")
        if isinstance(outcome, ServiceResult):
            return outcome
        data = {"input": str(path), **self._layer_data(start, outcome)}
        return ServiceResult(ok=True, op="layers", data=data)

    @traced
    def run(
        self,
        input_path: Path,
        start: int,
        output_path: Path,
        *,
        report: ReportConfig | None = None,
    ) -> ServiceResult:
        """Full pipeline: load, layer, and write the report to *output_path*.

        The report file is only touched once a complete LayerMap exists,
        so a failed run never leaves a partial report behind.
        """
        failure = self._load(input_path, op="run")
        if failure is not None:
            return failure

        outcome = self._layer_map(start, op="run")
        if isinstance(outcome, ServiceResult):
            return outcome

        written = ReportService(self._workspace).write(outcome, output_path, config=report)
        if not written.ok:
            return written.model_copy(update={"op": "run"})

        data = {
            "input": str(input_path),
            "output": str(output_path),
            **self._layer_data(start, outcome),
        }
        return ServiceResult(ok=True, op="run", data=data, warnings=written.warnings)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self, path: Path, *, op: str) -> ServiceResult | None:
        """Load *path* into the store; return a failed result or None."""
        with trace_span("read_input") as span:
            try:
                lines = self._workspace.read(path)
            except (OSError, UnicodeDecodeError) as exc:
                return self._fail(
                    op,
                    ErrorCode.INPUT_ACCESS,
                    f"Failed to open graph file: {path} ({exc})",
                    path=str(path),
                )
            if span:
                span.annotate("lines", len(lines))

        with trace_span("build_graph") as span:
            issue = self._workspace.build(lines)
            if span:
                span.annotate("vertices", len(self._workspace.store))

        if isinstance(issue, FormatIssue):
            return self._fail(
                op,
                ErrorCode.FORMAT_ERROR,
                f"Invalid format in graph file: {path} at line {issue.line_number}",
                path=str(path),
                line_number=issue.line_number,
                line=issue.line,
            )
        return None

    def _layer_map(self, start: int, *, op: str) -> LayerMap | ServiceResult:
        with trace_span("compute_layers") as span:
            outcome = self._workspace.layering.compute_layers(self._workspace.store, start)
            if span and not isinstance(outcome, UnknownStartVertex):
                span.annotate("layers", len(outcome))

        if isinstance(outcome, UnknownStartVertex):
            return self._fail(
                op,
                ErrorCode.UNKNOWN_START_VERTEX,
                f"Start vertex {outcome.vertex} not found in the graph",
                start=outcome.vertex,
            )
        return outcome

    @staticmethod
    def _layer_data(start: int, layer_map: LayerMap) -> dict[str, Any]:
        return {
            "start": start,
            "layer_count": len(layer_map),
            "vertex_count": sum(len(members) for members in layer_map.values()),
            "layers": layers_payload(layer_map),
        }
