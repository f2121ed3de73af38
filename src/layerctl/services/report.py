"""ReportService — render a LayerMap through a Jinja2 template and write it.

Labels, wrapping, encoding, and the optional byte-order mark are all
presentation settings from :class:`~layerctl.config.models.ReportConfig`;
the layering engine knows nothing about them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jinja2 import TemplateError

from layerctl.config.models import ReportConfig
from layerctl.domain.types import ErrorCode
from layerctl.infrastructure.files import write_report
from layerctl.infrastructure.templates import build_template_environment
from layerctl.services.base import BaseService
from layerctl.services.result import ServiceResult
from layerctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from pathlib import Path

    from layerctl.domain.layering import LayerMap


def _rows(vertices: tuple[int, ...], width: int) -> list[list[int]]:
    return [list(vertices[i : i + width]) for i in range(0, len(vertices), width)]


class ReportService(BaseService):
    """Renders and writes layer reports."""

    def _config(self, config: ReportConfig | None) -> ReportConfig:
        return config if config is not None else self._workspace.settings.report

    @traced
    def render(self, layer_map: LayerMap, *, config: ReportConfig | None = None) -> ServiceResult:
        """Render *layer_map* to report text (``data["text"]``)."""
        cfg = self._config(config)
        context: dict[str, Any] = {
            "layers": [
                {
                    "index": index,
                    "count": len(members),
                    "vertices": list(members),
                    "rows": _rows(members, cfg.wrap),
                }
                for index, members in sorted(layer_map.items())
            ],
            "layer_count": len(layer_map),
        }

        with trace_span("render_report"):
            try:
                env = build_template_environment("report", template_dir=cfg.template_dir)
                text = env.get_template(f"{cfg.locale}.txt.j2").render(**context)
            except TemplateError as exc:
                return self._fail(
                    "render_report",
                    ErrorCode.TEMPLATE_ERROR,
                    f"Failed to render report template '{cfg.locale}.txt.j2': {exc}",
                    locale=cfg.locale,
                )

        return ServiceResult(
            ok=True,
            op="render_report",
            data={"text": text, "locale": cfg.locale, "layer_count": len(layer_map)},
        )

    @traced
    def write(
        self,
        layer_map: LayerMap,
        path: Path,
        *,
        config: ReportConfig | None = None,
    ) -> ServiceResult:
        """Render *layer_map* and write it to *path*, replacing the file."""
        cfg = self._config(config)
        rendered = self.render(layer_map, config=cfg)
        if not rendered.ok:
            return rendered.model_copy(update={"op": "write_report"})

        text: str = rendered.data["text"]
        with trace_span("write_report"):
            try:
                write_report(path, text, encoding=cfg.encoding, bom=cfg.bom)
            except (OSError, LookupError, UnicodeEncodeError) as exc:
                return self._fail(
                    "write_report",
                    ErrorCode.OUTPUT_ACCESS,
                    f"Failed to open output file for writing: {path} ({exc})",
                    path=str(path),
                )

        return ServiceResult(
            ok=True,
            op="write_report",
            data={"path": str(path), "characters": len(text), "locale": cfg.locale},
        )
