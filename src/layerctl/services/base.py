"""BaseService — foundation for all layerctl services.

Every service receives a :class:`Workspace` at construction time. The
workspace holds the graph store, the layering engine, and the settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from layerctl.services.result import ServiceResult

if TYPE_CHECKING:
    from layerctl.infrastructure.workspace import Workspace

logger = structlog.get_logger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class LayeringService(BaseService):
            def layers(self, path: Path, start: int) -> ServiceResult:
                outcome = self._workspace.layering.compute_layers(...)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @staticmethod
    def _fail(op: str, code: str, message: str, **detail: object) -> ServiceResult:
        """Log an error event and return the matching failed result."""
        logger.error(message, op=op, code=code, **detail)
        return ServiceResult.failure(op, code, message, **detail)
