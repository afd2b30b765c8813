"""Logging for ubuntu-diag.

Every record goes to stderr so stdout only ever carries the report.
Collectors log through a :class:`ContextAdapter` that tags records with
the collector name. Collectors run in a thread pool, so the verbose format
also shows the worker thread.
"""

import logging
import sys
from typing import Any, MutableMapping, TextIO

ROOT_LOGGER = "ubuntu_diag"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"


def level_for(verbose: bool = False, quiet: bool = False) -> str:
    """Map the CLI verbosity flags to a level name. ``verbose`` wins."""
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return "INFO"


class ContextFormatter(logging.Formatter):
    """Formatter that appends a record's ``context`` as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{message} {pairs}"


class ContextAdapter(logging.LoggerAdapter):
    """Adapter that attaches fixed context, plus any per-call ``extra``, to records."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        context = dict(self.extra or {})
        context.update(kwargs.pop("extra", None) or {})
        kwargs["extra"] = {"context": context}
        return msg, kwargs


def configure_logging(
    level: str = "INFO",
    structured: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Install the single ubuntu-diag handler.

    Calling it again replaces the handler, so the CLI can reconfigure
    logging on every invocation.

    Args:
        level: Level name, case-insensitive (DEBUG, INFO, WARNING, ...)
        structured: Use the timestamped format with collector context
        stream: Destination, stderr when omitted
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    if structured:
        handler.setFormatter(ContextFormatter(VERBOSE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``ubuntu_diag`` hierarchy."""
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Get a logger whose records carry ``context``, e.g. ``collector="audio"``."""
    return ContextAdapter(get_logger(name), context)
