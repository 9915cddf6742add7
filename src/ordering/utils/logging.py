"""Logging setup for the ordering engine.

Modules log through ``structlog.get_logger(__name__)`` and nothing is
configured at import time. A host embedding the workflow calls
:func:`configure_logging` once. The workflow wraps each call in
:func:`order_context`, so events logged by the inventory, payment and
notification adapters carry the order they belong to.
"""

import logging
import logging.handlers
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVIRONMENTS = {"production", "staging"}
_MAX_LOG_BYTES = 10 * 1024 * 1024


def get_environment() -> str:
    return os.getenv("ORDERING_ENV", "development").lower()


def get_log_level(env: str | None = None) -> str:
    """Level for ``env``; ``LOG_LEVEL`` overrides it."""
    return os.getenv("LOG_LEVEL", _LEVELS.get(env or get_environment(), "INFO"))


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=_MAX_LOG_BYTES, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    return handler


def configure_logging(env: str | None = None, log_dir: str | Path | None = None) -> None:
    """Route structlog through the root logger.

    Output goes to stdout, and with ``log_dir`` also to ``ordering.log`` and
    ``ordering_error.log``. Production and staging render JSON lines.
    """
    env = (env or get_environment()).lower()
    level = get_log_level(env)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [logging.StreamHandler(sys.stdout)]
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        root.addHandler(_rotating_file(log_dir / "ordering.log", level))
        root.addHandler(_rotating_file(log_dir / "ordering_error.log", logging.ERROR))

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if env in _JSON_ENVIRONMENTS:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(max_frames=2),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def order_context(**fields) -> Iterator[None]:
    """Bind ``order_id``/``product`` to every event logged inside the block.

    Fields passed as ``None`` are skipped.
    """
    with structlog.contextvars.bound_contextvars(**{k: v for k, v in fields.items() if v is not None}):
        yield
