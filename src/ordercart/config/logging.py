"""Logging setup: structlog events rendered through stdlib ``logging``.

Everything goes to stderr so stdout stays reserved for command output.
``--log-json`` switches the console renderer for one JSON object per
line. ``-v`` opens DEBUG for the ``ordercart`` loggers only; third-party
loggers stay at WARNING.
"""

from __future__ import annotations

import logging
import logging.config
import sys

import structlog

_QUIET_LOGGERS = ("sqlalchemy", "asyncio", "pluggy")


def _pre_chain(log_json: bool) -> list[structlog.types.Processor]:
    chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_json:
        # JSON has no traceback styling; flatten exc_info into a string field.
        chain.append(structlog.processors.format_exc_info)
    chain.append(structlog.processors.UnicodeDecoder())
    return chain


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib records through one stderr handler."""
    pre_chain = _pre_chain(log_json)
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if log_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "ordercart": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "ordercart",
                    "stream": sys.stderr,
                },
            },
            "root": {"handlers": ["stderr"], "level": "WARNING"},
            "loggers": {
                "ordercart": {"level": "DEBUG" if verbose else "WARNING"},
                **{name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
            },
        }
    )
