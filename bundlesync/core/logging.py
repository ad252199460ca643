"""Logging for the CLI: structlog events routed through stdlib handlers on stderr."""

from __future__ import annotations

import logging
import logging.config
import os
import sys

import structlog

_QUIET_LOGGERS = ("httpx", "httpcore")


def _resolve_level(verbose: bool) -> str:
    if verbose:
        return "DEBUG"
    return os.environ.get("BUNDLESYNC_LOG_LEVEL", "WARNING").upper()


def setup_logging(verbose: bool = False) -> None:
    """Route ``bundlesync.*`` events to stderr.

    ``--verbose`` forces DEBUG; otherwise BUNDLESYNC_LOG_LEVEL applies
    (WARNING by default, so a clean run prints only command output).
    BUNDLESYNC_LOG_FORMAT=json emits one timestamped JSON object per line
    for CI logs; the console format is colored only on a terminal.
    """
    log_level = _resolve_level(verbose)
    as_json = os.environ.get("BUNDLESYNC_LOG_FORMAT", "console").lower() == "json"

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if as_json:
        pre_chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
        pre_chain.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "cli": {
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
                    "stream": "ext://sys.stderr",
                    "formatter": "cli",
                },
            },
            "root": {"handlers": ["stderr"], "level": "WARNING"},
            "loggers": {
                "bundlesync": {"level": log_level},
                **{name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
            },
        }
    )
