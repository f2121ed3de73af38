"""Tests for LayeringService — load, compute, layers, and run."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from layerctl.config.models import ReportConfig
from layerctl.infrastructure.workspace import Workspace
from layerctl.services.layering import LayeringService, layers_payload
from tests.conftest import SCENARIO_A, SCENARIO_B

WriteGraph = Callable[..., Path]


class TestLoad:
    def test_load_counts(self, workspace: Workspace, write_graph: WriteGraph) -> None:
        result = LayeringService(workspace).load(write_graph(SCENARIO_A))
        assert result.ok
        assert result.op == "load_graph"
        assert result.data["vertices"] == 5
        assert result.data["edges"] == 3
        assert result.data["empty"] is False
        assert result.warnings == []

    def test_load_empty_warns(self, workspace: Workspace, write_graph: WriteGraph) -> None:
        result = LayeringService(workspace).load(write_graph("# nothing\n\n"))
        assert result.ok
        assert result.data["empty"] is True
        assert len(result.warnings) == 1
        assert "empty" in result.warnings[0]

    def test_missing_file(self, workspace: Workspace, tmp_path: Path) -> None:
        result = LayeringService(workspace).load(tmp_path / "missing.txt")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INPUT_ACCESS"
        assert result.error.detail["path"].endswith("missing.txt")

    def test_directory_is_input_access_error(self, workspace: Workspace, tmp_path: Path) -> None:
        result = LayeringService(workspace).load(tmp_path)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INPUT_ACCESS"

    def test_undecodable_file(self, workspace: Workspace, tmp_path: Path) -> None:
        path = tmp_path / "binary.txt"
        path.write_bytes(b"1 2\n\xff\xfe\n")
        result = LayeringService(workspace).load(path)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INPUT_ACCESS"

    def test_format_error(self, workspace: Workspace, write_graph: WriteGraph) -> None:
        result = LayeringService(workspace).load(write_graph("1 2\nabc 1 2\n"))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "FORMAT_ERROR"
        assert result.error.detail["line_number"] == 2
        assert result.error.detail["line"] == "abc 1 2"
        assert "line 2" in result.error.message
        assert len(workspace.store) == 0

    def test_failed_read_drops_previous_graph(
        self, workspace: Workspace, write_graph: WriteGraph, tmp_path: Path
    ) -> None:
        svc = LayeringService(workspace)
        assert svc.load(write_graph(SCENARIO_A)).ok
        assert not svc.load(tmp_path / "missing.txt").ok
        assert len(workspace.store) == 0

    def test_utf8_bom_tolerated(self, workspace: Workspace, tmp_path: Path) -> None:
        path = tmp_path / "bom.txt"
        path.write_bytes(b"\xef\xbb\xbf1 2\n")
        result = LayeringService(workspace).load(path)
        assert result.ok
        assert result.data["vertices"] == 2


class TestLayers:
    def test_scenario_a(self, workspace: Workspace, write_graph: WriteGraph) -> None:
        result = LayeringService(workspace).layers(write_graph(SCENARIO_A), 1)
        assert result.ok
        assert result.data["start"] == 1
        assert result.data["layers"] == [
            {"index": 0, "count": 1, "vertices": [1]},
            {"index": 1, "count": 2, "vertices": [2, 3]},
        ]

    def test_unknown_start(self, workspace: Workspace, write_graph: WriteGraph) -> None:
        result = LayeringService(workspace).layers(write_graph(SCENARIO_A), 42)
        assert not result.ok
        assert result.op == "layers"
        assert result.error is not None
        assert result.error.code == "UNKNOWN_START_VERTEX"
        assert "42" in result.error.message

    def test_unknown_start_keeps_graph(self, workspace: Workspace, write_graph: WriteGraph) -> None:
        LayeringService(workspace).layers(write_graph(SCENARIO_A), 42)
        assert len(workspace.store) == 5


class TestRun:
    def test_writes_report(
        self, workspace: Workspace, write_graph: WriteGraph, tmp_path: Path
    ) -> None:
        out = tmp_path / "layers.txt"
        result = LayeringService(workspace).run(write_graph(SCENARIO_A), 1, out)
        assert result.ok
        assert result.op == "run"
        assert result.data["output"] == str(out)
        assert result.data["layer_count"] == 2
        text = out.read_text(encoding="utf-8")
        assert "Layer 1 (vertex count: 2):" in text
        assert "Total layers: 2" in text

    def test_report_overwrites_existing_file(
        self, workspace: Workspace, write_graph: WriteGraph, tmp_path: Path
    ) -> None:
        out = tmp_path / "layers.txt"
        out.write_text("stale content that is longer than nothing\n" * 50, encoding="utf-8")
        assert LayeringService(workspace).run(write_graph(SCENARIO_B), 4, out).ok
        text = out.read_text(encoding="utf-8")
        assert "stale" not in text
        assert text.startswith("Graph layering results:")

    def test_report_config_override(
        self, workspace: Workspace, write_graph: WriteGraph, tmp_path: Path
    ) -> None:
        out = tmp_path / "layers.txt"
        report = ReportConfig(locale="ru", bom=True)
        assert LayeringService(workspace).run(write_graph(SCENARIO_B), 1, out, report=report).ok
        raw = out.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")
        assert "Общее количество слоёв: 4" in raw.decode("utf-8-sig")

    def test_unknown_start_leaves_no_file(
        self, workspace: Workspace, write_graph: WriteGraph, tmp_path: Path
    ) -> None:
        out = tmp_path / "layers.txt"
        result = LayeringService(workspace).run(write_graph(SCENARIO_A), 9, out)
        assert not result.ok
        assert not out.exists()

    def test_format_error_leaves_existing_file_untouched(
        self, workspace: Workspace, write_graph: WriteGraph, tmp_path: Path
    ) -> None:
        out = tmp_path / "layers.txt"
        out.write_text("previous report\n", encoding="utf-8")
        result = LayeringService(workspace).run(write_graph("x y\n"), 1, out)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "FORMAT_ERROR"
        assert out.read_text(encoding="utf-8") == "previous report\n"

    def test_output_access_error(
        self, workspace: Workspace, write_graph: WriteGraph, tmp_path: Path
    ) -> None:
        out = tmp_path / "no-such-dir" / "layers.txt"
        result = LayeringService(workspace).run(write_graph(SCENARIO_A), 1, out)
        assert not result.ok
        assert result.op == "run"
        assert result.error is not None
        assert result.error.code == "OUTPUT_ACCESS"
        assert result.error.detail["path"] == str(out)


class TestLayersPayload:
    def test_orders_by_index(self) -> None:
        payload = layers_payload({1: (5, 6), 0: (4,)})
        assert [layer["index"] for layer in payload] == [0, 1]
        assert payload[1] == {"index": 1, "count": 2, "vertices": [5, 6]}
