from __future__ import annotations

from typing import Any, Dict, Optional


class SchedulerError(Exception):
    """Base class for all scheduler errors."""


class InvalidInputError(SchedulerError, ValueError):
    """
    The process list cannot be scheduled as given (empty, bad burst or
    arrival time, duplicate PID, missing completion time, unreadable workload).
    """


class InternalInvariantError(SchedulerError, RuntimeError):
    """
    The simulation broke one of its own guarantees. ``state`` holds the
    values at the point of failure.
    """

    def __init__(self, message: str, state: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.state: Dict[str, Any] = dict(state or {})

    def __str__(self) -> str:
        base = super().__str__()
        if not self.state:
            return base
        details = ", ".join(f"{k}={v!r}" for k, v in self.state.items())
        return f"{base} ({details})"
