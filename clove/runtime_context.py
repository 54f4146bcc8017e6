from __future__ import annotations

import time
from contextvars import ContextVar
from typing import Optional

from clove.errors import EvalTimeoutError

# Monotonic deadline for the evaluation running in this context, if any.
_deadline: ContextVar[Optional[float]] = ContextVar("clove_deadline", default=None)


def set_deadline(timeout: Optional[float]):
    """Arm a deadline `timeout` seconds from now; returns a token for reset_deadline."""
    deadline = None if timeout is None else time.monotonic() + timeout
    return _deadline.set(deadline)


def reset_deadline(token) -> None:
    _deadline.reset(token)


def check_deadline() -> None:
    deadline = _deadline.get()
    if deadline is not None and time.monotonic() > deadline:
        raise EvalTimeoutError("Evaluation timed out")
