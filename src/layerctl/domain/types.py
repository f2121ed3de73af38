"""Error kinds surfaced by layering operations."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """``ServiceError.code`` values, one per failure kind."""

    INPUT_ACCESS = "INPUT_ACCESS"
    FORMAT_ERROR = "FORMAT_ERROR"
    UNKNOWN_START_VERTEX = "UNKNOWN_START_VERTEX"
    OUTPUT_ACCESS = "OUTPUT_ACCESS"
    TEMPLATE_ERROR = "TEMPLATE_ERROR"
