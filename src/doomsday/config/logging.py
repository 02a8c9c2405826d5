"""structlog setup for the doomsday CLI.

Everything goes to stderr so command output stays pipeable. The console
format is terse (level, logger, event); ``--log-json`` switches to one JSON
object per line with a UTC timestamp, for log shippers.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Libraries whose DEBUG chatter would drown out --verbose output.
_NOISY_LOGGERS = ("httpx", "httpcore")

_PACKAGE_LOGGER = "doomsday"


def _renderer_chain(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    # Console lines carry no timestamp.
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty(), pad_event=0)]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route stdlib and structlog records through one stderr handler.

    ``doomsday.*`` logs at DEBUG with *verbose*, WARNING otherwise. Calling
    this again replaces the previous handler.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer_chain(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
