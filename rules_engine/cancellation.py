"""
Cooperative cancellation for rule evaluation.
"""

import threading
import time
from typing import Optional, Union

from .errors import EvaluationCancelledError


class CancellationToken:
    """Cancellation flag with an optional deadline.

    The engine checks the token before the first condition and between
    conditions. A comparator that is already running is never interrupted.
    """

    def __init__(self, deadline: Optional[float] = None):
        self._event = threading.Event()
        # time.monotonic() value after which the token counts as expired
        self.deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def reason(self) -> Optional[str]:
        if self._event.is_set():
            return "cancelled"
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return "deadline exceeded"
        return None

    @property
    def cancelled(self) -> bool:
        return self.reason is not None

    def raise_if_cancelled(self) -> None:
        reason = self.reason
        if reason is not None:
            raise EvaluationCancelledError(reason)


CancelSignal = Union[CancellationToken, threading.Event]


def check_cancelled(signal: Optional[CancelSignal]) -> None:
    """Raise EvaluationCancelledError if ``signal`` has been triggered."""
    if signal is None:
        return
    if isinstance(signal, threading.Event):
        if signal.is_set():
            raise EvaluationCancelledError()
        return
    signal.raise_if_cancelled()
