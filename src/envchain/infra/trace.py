"""Infrastructure: the ``ENVCHAIN_TRACE`` diagnostic sink.

envchain logs every search step, resolution and assignment at DEBUG on
the ``envchain`` logger hierarchy.  Nothing is emitted unless
``ENVCHAIN_TRACE`` is set:

* a decimal integer names an already-open file descriptor (``2`` is
  stderr); envchain never closes it;
* anything else is a file path, opened in append mode.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import TextIO

from envchain.exceptions import TraceSinkError

TRACE_ENV_VAR: str = "ENVCHAIN_TRACE"
LOGGER_NAME: str = "envchain"
TRACE_FORMAT: str = "envchain[%(process)d] %(name)s: %(message)s"


class TraceHandler(logging.StreamHandler):
    """Stream handler bound to the ``ENVCHAIN_TRACE`` sink."""

    def __init__(self, stream: TextIO, target: str) -> None:
        super().__init__(stream)
        self.target: str = target


def open_trace_stream(target: str) -> TextIO:
    """Open the sink named by *target* for writing.

    Raises
    ------
    TraceSinkError
        If the descriptor is invalid or the file cannot be opened.
    """
    if target.isdigit():
        try:
            return os.fdopen(int(target), "w", buffering=1, closefd=False)
        except OSError as exc:
            raise TraceSinkError(
                f"cannot write trace to file descriptor {target}: {exc.strerror or exc}",
                hint=f"Unset {TRACE_ENV_VAR} or point it at an open descriptor.",
            ) from exc
    try:
        return open(target, "a", buffering=1, encoding="utf-8")
    except OSError as exc:
        raise TraceSinkError(
            f"cannot open trace file {target}: {exc.strerror or exc}",
            hint=f"Unset {TRACE_ENV_VAR} or point it at a writable path.",
        ) from exc


def _installed_handler(logger: logging.Logger) -> TraceHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, TraceHandler):
            return handler
    return None


def configure_trace(environ: Mapping[str, str]) -> TraceHandler | None:
    """Install the trace handler when ``ENVCHAIN_TRACE`` is set.

    Idempotent: a second call returns the handler already installed.
    Returns ``None`` when tracing is disabled.
    """
    target = environ.get(TRACE_ENV_VAR, "").strip()
    if not target:
        return None

    logger = logging.getLogger(LOGGER_NAME)
    existing = _installed_handler(logger)
    if existing is not None:
        return existing

    handler = TraceHandler(open_trace_stream(target), target)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(TRACE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.debug("trace enabled (%s=%s)", TRACE_ENV_VAR, target)
    return handler


def flush_trace() -> None:
    """Flush the trace sink; called before the process image is replaced."""
    handler = _installed_handler(logging.getLogger(LOGGER_NAME))
    if handler is not None:
        handler.flush()


def remove_trace() -> None:
    """Detach and close the trace handler, restoring default logging."""
    logger = logging.getLogger(LOGGER_NAME)
    handler = _installed_handler(logger)
    if handler is None:
        return
    logger.removeHandler(handler)
    handler.stream.close()
    handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
