"""Tests for ReportService — template rendering and report files."""

from __future__ import annotations

from pathlib import Path

from layerctl.config.models import ReportConfig
from layerctl.infrastructure.workspace import Workspace
from layerctl.services.report import ReportService

_LAYERS = {0: (1,), 1: (2, 3)}


class TestRender:
    def test_english_report(self, workspace: Workspace) -> None:
        result = ReportService(workspace).render(_LAYERS)
        assert result.ok
        assert result.data["text"] == (
            "Graph layering results:\n"
            "=================================\n"
            "\n"
            "Layer 0 (vertex count: 1):\n"
            "Vertices:\n"
            "  1\n"
            "\n"
            "Layer 1 (vertex count: 2):\n"
            "Vertices:\n"
            "  2, 3\n"
            "\n"
            "=================================\n"
            "Total layers: 2\n"
        )

    def test_russian_report(self, workspace: Workspace) -> None:
        result = ReportService(workspace).render(_LAYERS, config=ReportConfig(locale="ru"))
        assert result.ok
        text = result.data["text"]
        assert text.startswith("Результаты разбиения графа на слои:\n")
        assert "Слой 1 (количество вершин: 2):\nВершины:\n  2, 3\n" in text
        assert text.endswith("Общее количество слоёв: 2\n")

    def test_russian_report_exact_layout(self, workspace: Workspace) -> None:
        layers = {0: (0,), 1: tuple(range(1, 13))}
        config = ReportConfig(locale="ru")
        text = ReportService(workspace).render(layers, config=config).data["text"]
        assert text == (
            "Результаты разбиения графа на слои:\n"
            "=================================\n"
            "\n"
            "Слой 0 (количество вершин: 1):\n"
            "Вершины:\n"
            "  0\n"
            "\n"
            "Слой 1 (количество вершин: 12):\n"
            "Вершины:\n"
            "  1, 2, 3, 4, 5, 6, 7, 8, 9, 10, \n"
            "  11, 12\n"
            "\n"
            "=================================\n"
            "\n"
            "Общее количество слоёв: 2\n"
        )

    def test_rows_wrap_at_ten_by_default(self, workspace: Workspace) -> None:
        layer = tuple(range(1, 13))
        text = ReportService(workspace).render({0: (0,), 1: layer}).data["text"]
        assert "  1, 2, 3, 4, 5, 6, 7, 8, 9, 10,\n  11, 12\n" in text

    def test_custom_wrap(self, workspace: Workspace) -> None:
        text = (
            ReportService(workspace)
            .render({0: (0,), 1: (1, 2, 3)}, config=ReportConfig(wrap=2))
            .data["text"]
        )
        assert "  1, 2,\n  3\n" in text

    def test_user_template_override(self, workspace: Workspace, tmp_path: Path) -> None:
        template_dir = tmp_path / "templates"
        (template_dir / "report").mkdir(parents=True)
        (template_dir / "report" / "en.txt.j2").write_text(
            "{% for layer in layers %}{{ layer.index }}:{{ layer.vertices | join(' ') }}\n"
            "{% endfor %}",
            encoding="utf-8",
        )
        result = ReportService(workspace).render(
            _LAYERS, config=ReportConfig(template_dir=template_dir)
        )
        assert result.ok
        assert result.data["text"] == "0:1\n1:2 3\n"

    def test_flat_override_directory(self, workspace: Workspace, tmp_path: Path) -> None:
        (tmp_path / "en.txt.j2").write_text("layers={{ layer_count }}", encoding="utf-8")
        result = ReportService(workspace).render(
            _LAYERS, config=ReportConfig(template_dir=tmp_path)
        )
        assert result.data["text"] == "layers=2"

    def test_broken_template(self, workspace: Workspace, tmp_path: Path) -> None:
        (tmp_path / "en.txt.j2").write_text("{% for x in %}", encoding="utf-8")
        result = ReportService(workspace).render(
            _LAYERS, config=ReportConfig(template_dir=tmp_path)
        )
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "TEMPLATE_ERROR"

    def test_defaults_come_from_settings(self, workspace: Workspace) -> None:
        assert workspace.settings.report.locale == "en"
        result = ReportService(workspace).render(_LAYERS)
        assert result.data["locale"] == "en"


class TestWrite:
    def test_write_without_bom(self, workspace: Workspace, tmp_path: Path) -> None:
        out = tmp_path / "report.txt"
        result = ReportService(workspace).write(_LAYERS, out)
        assert result.ok
        assert out.read_bytes().startswith(b"Graph layering results:")

    def test_write_with_bom(self, workspace: Workspace, tmp_path: Path) -> None:
        out = tmp_path / "report.txt"
        assert ReportService(workspace).write(_LAYERS, out, config=ReportConfig(bom=True)).ok
        assert out.read_bytes()[:3] == b"\xef\xbb\xbf"

    def test_alternate_encoding(self, workspace: Workspace, tmp_path: Path) -> None:
        out = tmp_path / "report.txt"
        config = ReportConfig(locale="ru", encoding="cp1251")
        assert ReportService(workspace).write(_LAYERS, out, config=config).ok
        assert out.read_text(encoding="cp1251").startswith("Результаты")

    def test_unknown_encoding_is_output_error(self, workspace: Workspace, tmp_path: Path) -> None:
        out = tmp_path / "report.txt"
        config = ReportConfig(encoding="no-such-codec")
        result = ReportService(workspace).write(_LAYERS, out, config=config)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "OUTPUT_ACCESS"
        assert not out.exists()

    def test_unwritable_path(self, workspace: Workspace, tmp_path: Path) -> None:
        result = ReportService(workspace).write(_LAYERS, tmp_path)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "OUTPUT_ACCESS"
