"""Log output for the cdpgen command line.

The pipeline logs through structlog under the ``cdpgen`` logger name:
``generating``/``generated`` per run, ``writing``/``skipping`` per module at
info level, and a warning when a module could not be formatted. The CLI
routes all of it to stderr, so stdout carries only the run summary.
"""

from __future__ import annotations

import logging
import sys

import structlog

_PACKAGE_LOGGER = "cdpgen"


def _pre_chain() -> list[structlog.types.Processor]:
    # Shared by structlog loggers and plain `logging` records.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(*, log_json: bool) -> logging.Handler:
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Send cdpgen's log events to stderr.

    Without ``verbose`` only the formatter fallback warning and worse get
    through; with it the per-module ``writing``/``skipping`` events show up
    too. ``log_json`` switches from console rendering to one JSON object per
    line. Calling it again replaces the previous setup.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(log_json=log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
