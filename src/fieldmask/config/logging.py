"""structlog setup for the ``fieldmask`` logger tree.

Only the package logger is touched: one handler is attached to
``fieldmask`` (propagation off), so a host application's root logging
stays as it was. Reconfiguring replaces that handler and nothing else.

Masks in event dicts are rendered in wire form, so a line reads
``mask={'password': 0} mask_type=exclude`` instead of a repr.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from fieldmask.config.models import LoggingConfig
from fieldmask.domain.mask import FieldMask

LOGGER_NAME = "fieldmask"
HANDLER_NAME = "fieldmask.structlog"


def render_masks(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Replace FieldMask values with ``get()`` output, adding ``<key>_type``."""
    for key, value in list(event_dict.items()):
        if isinstance(value, FieldMask):
            event_dict[key] = value.get()
            event_dict[f"{key}_type"] = value.type.value
    return event_dict


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route ``fieldmask`` loggers (stdlib and structlog) to stderr.

    Args:
        verbose: DEBUG for the package loggers; WARNING+ otherwise.
        log_json: One JSON object per line instead of console output.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        render_masks,
    ]
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in package_logger.handlers if h.get_name() == HANDLER_NAME]:
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.propagate = False
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def configure_from_config(config: LoggingConfig) -> None:
    """Apply a ``[logging]`` section."""
    configure_logging(verbose=config.verbose, log_json=config.log_json)
