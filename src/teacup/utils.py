from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

DEBUG_PY_TRACE_ENV = "TEACUP_DEBUG_PY_TRACE"
LOG_LEVEL_ENV = "TEACUP_LOG_LEVEL"
RECURSION_LIMIT_ENV = "TEACUP_RECURSION_LIMIT"

DEFAULT_RECURSION_LIMIT = 10_000

_TRUTHY = {"1", "true", "yes", "on"}

def debug_py_trace_enabled() -> bool:
    return os.environ.get(DEBUG_PY_TRACE_ENV, "").strip().lower() in _TRUTHY

def set_debug_py_trace(enabled: bool) -> None:
    if enabled:
        os.environ[DEBUG_PY_TRACE_ENV] = "1"
    else:
        os.environ.pop(DEBUG_PY_TRACE_ENV, None)

def log_level() -> int:
    raw = os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.WARNING

def configure_logging() -> None:
    """Route the ``teacup`` logger to stderr at TEACUP_LOG_LEVEL."""
    logger = logging.getLogger("teacup")
    logger.setLevel(log_level())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(name)s %(levelname)s: %(message)s"))
        logger.addHandler(handler)

def recursion_limit() -> int:
    raw = os.environ.get(RECURSION_LIMIT_ENV, "").strip()
    if not raw:
        return DEFAULT_RECURSION_LIMIT

    try:
        return int(raw)
    except ValueError:
        return DEFAULT_RECURSION_LIMIT

@contextmanager
def deep_recursion(limit: Optional[int] = None) -> Iterator[None]:
    """Raise the host recursion limit while a tree walk runs, then restore it.

    The limit is only ever raised, never lowered below the current one.
    """
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit if limit is not None else recursion_limit()))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
