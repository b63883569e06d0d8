"""Installer logging: structlog rendering on top of stdlib ``logging``.

Modules log through ``logging.getLogger(__name__)``.  One stderr handler
renders every record, so stdout carries only the command's result:

- Human (default): console lines, colored on a terminal
- JSON (``--log-json``): one JSON object per line

A setup run binds ``setup_run`` (a short id) and ``mode`` through
:func:`setup_run_context`; both land on every line logged while the run
is in progress, which is how one run is picked out of a shared log.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Iterator

# Third-party loggers and the level they are held at regardless of -v.
_QUIET_LOGGERS: dict[str, int] = {
    "alembic": logging.WARNING,
    "passlib": logging.ERROR,
}


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route all logging through one structlog-formatted stderr handler.

    Safe to call more than once; the previous handler and any context
    left bound by an earlier run are dropped.

    Args:
        verbose: DEBUG for ``talkctl`` loggers (stage transitions, each
            answered question).  WARNING otherwise.
        log_json: JSON lines instead of console lines.
    """
    structlog.contextvars.clear_contextvars()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: structlog.types.Processor
    if log_json:
        # JSON has no traceback layout of its own.
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
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

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("talkctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


@contextmanager
def setup_run_context(mode: str) -> Iterator[str]:
    """Tag every log line inside the block with a fresh run id and *mode*.

    Yields the run id.  The previous context is restored on exit.
    """
    run_id = uuid.uuid4().hex[:8]
    with structlog.contextvars.bound_contextvars(setup_run=run_id, mode=mode):
        yield run_id
