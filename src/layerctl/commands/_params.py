"""Click parameter types shared by commands."""

from __future__ import annotations

from typing import Any

import click

from layerctl.domain.graph import VERTEX_MAX, VERTEX_MIN, parse_vertex


class VertexIdType(click.ParamType):
    """A vertex id: a base-10 integer within the signed 32-bit range."""

    name = "vertex"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> int:
        if isinstance(value, int):
            vertex = value if VERTEX_MIN <= value <= VERTEX_MAX else None
        else:
            vertex = parse_vertex(str(value).strip())
        if vertex is None:
            self.fail(
                f"{value!r} is not an integer in [{VERTEX_MIN}, {VERTEX_MAX}].",
                param,
                ctx,
            )
        return vertex


VERTEX_ID = VertexIdType()
