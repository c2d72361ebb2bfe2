"""Structlog setup shared by both transports.

Records render as one plain-text line: ``<timestamp> [LEVEL] event key=value``.
The console handler writes to stderr because stdout is the MCP stdio channel.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog
from structlog.types import Processor

from .config import ServerSettings, env_file_candidates, get_settings, resolved_env_file

REDACTED = "***"
_SECRET_FIELDS = frozenset({"api_key", "serpapi_key", "authorization", "token"})
_NOISY_LOGGERS = ("watchfiles.main", "httpx", "httpcore", "mcp.server.lowlevel.server")

_CONFIGURED = False


def _redact_secrets(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    for key in _SECRET_FIELDS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def _render_line(_: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> str:
    timestamp = event_dict.pop("timestamp", None) or datetime.now(tz=timezone.utc).isoformat()
    level = str(event_dict.pop("level", method_name)).upper()
    event = event_dict.pop("event", "")

    fields = " ".join(f"{key}={value}" for key, value in event_dict.items() if value is not None)
    return " ".join(part for part in (timestamp, f"[{level}]", event, fields) if part)


def _handler(handler: logging.Handler, level: str) -> logging.Handler:
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _render_line,
            ],
        )
    )
    handler.setLevel(level)
    return handler


def configure_logging(settings: ServerSettings | None = None, *, force: bool = False) -> None:
    """Install the structlog pipeline and the root handlers once per process."""

    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    settings = settings or get_settings()
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]
    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers = [_handler(logging.StreamHandler(sys.stderr), settings.log_level)]
    log_file = (settings.log_file or "").strip()
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_handler(logging.FileHandler(path, encoding="utf-8"), settings.log_level))

    logging.basicConfig(handlers=handlers, level=settings.log_level, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _CONFIGURED = True
    structlog.get_logger(__name__).info(
        "logging_configured",
        env=settings.app_env,
        level=settings.log_level,
        log_file=log_file or "stderr-only",
        env_file=resolved_env_file() or "not-found",
        env_candidates=list(env_file_candidates()),
    )


def get_logger(*args: Any, **kwargs: Any) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, configuring logging on first use."""

    configure_logging()
    return structlog.get_logger(*args, **kwargs)
