"""
Core utility functions
"""
from contextlib import contextmanager
from typing import Iterator

from .logging import get_logger

logger = get_logger(__name__)


# ============================================================
# Best-effort Operations
# ============================================================

@contextmanager
def best_effort(action: str) -> Iterator[None]:
    """
    Run a non-critical step, discarding any error it raises.

    Only for steps whose failure must never change the outcome of the run
    (banner drain, interrupt forwarding, final disconnect). Fatal steps
    propagate their exceptions instead.

    Args:
        action: Short description used in the debug log line
    """
    try:
        yield
    except Exception as e:
        logger.debug(f"Ignored error during {action}: {e!r}")
