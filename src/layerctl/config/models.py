"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, layerctl.toml only contains overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class ReportConfig(BaseModel):
    """[report] section."""

    model_config = {"frozen": True}

    locale: Literal["en", "ru"] = "en"
    wrap: int = Field(default=10, ge=1)
    encoding: str = "utf-8"
    bom: bool = False
    template_dir: Path | None = None


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    file: Path | None = None

