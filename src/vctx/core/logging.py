"""Structured logging for vctx.

Diagnostics go through structlog into stdlib handlers on stderr or a file,
never stdout, so they cannot corrupt rendered context or JSON output that
callers pipe into other tools. Events are snake_case names with keyword
fields, e.g. ``log.debug("workspace_located", workspace_id=...)``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from vctx.config.models import LoggingConfig, LogOutputConfig

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
]


def _level(name: str | None, default: int = logging.WARNING) -> int:
    return _LEVELS.get(name.upper(), default) if name else default


def _create_handler(destination: str) -> logging.Handler:
    """Stream handler for ``stderr``/``stdout``, otherwise an appending file."""
    if destination in ("stderr", "stdout"):
        return logging.StreamHandler(getattr(sys, destination))
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def _formatter(output: LogOutputConfig) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        on_tty = output.destination == "stderr" and sys.stderr.isatty()
        renderer = structlog.dev.ConsoleRenderer(colors=on_tty, pad_event_to=0, pad_level=False)
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str | None = None,
) -> None:
    """Route structlog through stdlib handlers, one per configured output.

    Safe to call repeatedly: previous root handlers are replaced.

    Args:
        config: Logging section; a single stderr output when None
        json_format: Render JSON instead of console lines (only without config)
        level: Overrides ``config.level``, e.g. ``"DEBUG"`` for ``--verbose``
    """
    from vctx.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        output = LogOutputConfig(format="json" if json_format else "console")
        config = LoggingConfig(outputs=[output])
    if level is not None:
        config = config.model_copy(update={"level": level.upper()})

    root_level = _level(config.level)
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # No caching so a later configure_logging() takes effect everywhere
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)

    for output in config.outputs:
        handler = _create_handler(output.destination)
        handler.setLevel(_level(output.level, root_level))
        handler.setFormatter(_formatter(output))
        root.addHandler(handler)
