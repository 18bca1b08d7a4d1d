"""structlog configuration for hakot.

Every record, from structlog or stdlib loggers, passes through
:func:`redact_secrets` before rendering to stderr, either as console text
or as JSON lines (``--log-json``).
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog

# Event keys that may carry a plaintext password or a stored hash.
SECRET_KEYS = frozenset({"password", "password_hash"})

REDACTED = "[redacted]"

_BCRYPT_HASH = re.compile(r"\$2[abxy]?\$\S*")


def redact_secrets(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Drop secret-named keys and mask bcrypt hashes in the rendered text."""
    for key in SECRET_KEYS & event_dict.keys():
        del event_dict[key]
    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = _BCRYPT_HASH.sub(REDACTED, event)
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route ``hakot`` logging to stderr through structlog.

    Args:
        verbose: Let ``hakot`` loggers emit DEBUG records; otherwise
            WARNING and above.
        log_json: Render JSON lines instead of console text.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
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

    logging.getLogger("hakot").setLevel(logging.DEBUG if verbose else logging.WARNING)
