"""Structured logging configuration using structlog."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import Processor

AUDIT_LOGGER = "flit.audit"

SIZE_UNITS = {"KB": 1024, "MB": 1024**2, "GB": 1024**3, "B": 1}


def setup_logging(
    level: str = "INFO",
    format_type: str = "structured",
    file_enabled: bool = False,
    file_path: str = "data/flit.log",
    max_file_size: str = "10MB",
    backup_count: int = 5,
) -> None:
    """
    Set up application logging with structlog.

    Console output is rendered for humans; the rotating file, when enabled,
    always receives one JSON object per line so audit events can be grepped.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'structured' (key=value console) or 'plain' (colored)
        file_enabled: Whether to also write JSON lines to ``file_path``
        file_path: Path to log file
        max_file_size: Rotation size such as ``"512KB"`` or ``"10MB"``
        backup_count: Number of rotated files to keep
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=format_type == "plain"),
            ],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers = [console]
    root.setLevel(log_level)

    if file_enabled:
        root.addHandler(
            _file_handler(file_path, max_file_size, backup_count, shared)
        )

    # uvicorn access lines duplicate the request-id middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def _file_handler(
    file_path: str,
    max_file_size: str,
    backup_count: int,
    shared: list,
) -> logging.Handler:
    log_file = Path(file_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=parse_file_size(max_file_size),
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
            foreign_pre_chain=shared,
        )
    )
    return handler


def parse_file_size(size: str) -> int:
    """Parse ``"10MB"``-style sizes into bytes; bare numbers are bytes."""
    text = size.strip().upper()
    for unit, factor in SIZE_UNITS.items():
        if text.endswith(unit):
            number = text[: -len(unit)].strip()
            break
    else:
        number, factor = text, 1

    if not number.isdigit():
        raise ValueError(f"Invalid log file size: {size!r}")
    return int(number) * factor


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, usually ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def log_audit_event(
    action: str,
    user_id: Optional[str] = None,
    league_id: Optional[str] = None,
    **context: Any,
) -> None:
    """
    Record a state-changing league action on the audit logger.

    Args:
        action: What happened, e.g. ``"draft_pick"`` or ``"league_joined"``
        user_id: Acting user
        league_id: League the action belongs to
        **context: Extra fields (asset ids, round, priority...)
    """
    get_logger(AUDIT_LOGGER).info(
        "Audit event",
        action=action,
        user_id=user_id,
        league_id=league_id,
        audit=True,
        **context,
    )
