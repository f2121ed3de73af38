"""structlog configuration for layerctl.

Two stderr output modes:
- Human (default): colored console output to stderr
- JSON (--log-json): Structured JSON lines to stderr

An optional log file receives the same events as timestamped, leveled
lines appended to the file. The handle returned by
:func:`configure_logging` detaches and closes that file.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import structlog

_APP_LOGGER = "layerctl"


@dataclass
class LoggingHandle:
    """Owner of the sinks installed by :func:`configure_logging`."""

    file_handler: logging.FileHandler | None = None

    def close(self) -> None:
        """Detach and close the file sink. Safe to call more than once."""
        if self.file_handler is None:
            return
        structlog.get_logger(_APP_LOGGER).info("logging.stopped")
        logging.getLogger().removeHandler(self.file_handler)
        self.file_handler.close()
        self.file_handler = None


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    log_file: Path | None = None,
) -> LoggingHandle:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. When False, stderr shows only
            WARNING+ and the log file INFO+.
        log_json: Use JSON renderer instead of console renderer on stderr.
        log_file: Append log lines to this file.

    Raises:
        OSError: If *log_file* cannot be opened for appending.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root_logger.handlers.clear()
    root_logger.addHandler(stream_handler)
    root_logger.setLevel(logging.WARNING)

    handle = LoggingHandle()
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared_processors,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _format_file_line,
                ],
            )
        )
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        root_logger.addHandler(file_handler)
        handle.file_handler = file_handler

    app_logger = logging.getLogger(_APP_LOGGER)
    if verbose:
        app_logger.setLevel(logging.DEBUG)
    elif log_file is not None:
        app_logger.setLevel(logging.INFO)
    else:
        app_logger.setLevel(logging.WARNING)

    if handle.file_handler is not None:
        structlog.get_logger(_APP_LOGGER).info("logging.started", file=str(log_file))
    return handle


def _format_file_line(
    _logger: object, _method: str, event_dict: structlog.types.EventDict
) -> str:
    """Render ``[timestamp] [LEVEL] event key=value ...`` for the log file."""
    timestamp = event_dict.pop("timestamp", "")
    level = str(event_dict.pop("level", "info")).upper()
    event = event_dict.pop("event", "")
    event_dict.pop("logger", None)
    fields = " ".join(f"{key}={value}" for key, value in event_dict.items())
    line = f"[{timestamp}] [{level}] {event}"
    return f"{line} {fields}" if fields else line
