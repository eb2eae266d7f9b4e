"""structlog configuration for capsule.

The library itself only logs through stdlib ``logging.getLogger(__name__)``.
Applications that want capsule's records rendered call
:func:`configure_logging` once, usually through :func:`capsule.runtime.bootstrap`.

Two output modes:
- Human (default): console renderer, colored when the stream is a tty
- JSON (log_json): one JSON object per line
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LIBRARY_LOGGER = "capsule"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route stdlib and structlog records through one structlog formatter.

    Args:
        verbose: Emit capsule DEBUG records. When False, only WARNING+.
        log_json: Use the JSON renderer instead of the console renderer.
        stream: Output stream. Defaults to stderr.
    """
    out = stream if stream is not None else sys.stderr
    capsule_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    final_processors: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if log_json:
        # exc_info becomes a structured "exception" key.
        final_processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors.append(structlog.dev.ConsoleRenderer(colors=out.isatty()))

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
        processors=final_processors,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(formatter)

    # Replace rather than append so repeated calls never stack handlers.
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(LIBRARY_LOGGER).setLevel(capsule_level)
