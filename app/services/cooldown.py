"""
Process-wide cooldown between accepted scrape triggers.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional


@dataclass(frozen=True)
class CooldownDecision:
    """Result of asking the gate for a trigger slot."""

    accepted: bool
    remaining_seconds: float = 0.0
    # Instant recorded for an accepted trigger; pass it back to release()
    token: Optional[float] = None

    @property
    def remaining_minutes(self) -> int:
        """Whole minutes left in the window, rounded up."""
        return max(1, math.ceil(self.remaining_seconds / 60)) if not self.accepted else 0


class CooldownGate:
    """
    Accepts at most one trigger per cooldown window.

    The check and the update of the last accepted instant happen under one
    lock, so of two simultaneous callers exactly one is accepted.
    """

    def __init__(
        self,
        cooldown: timedelta = timedelta(minutes=10),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cooldown = cooldown.total_seconds()
        self._clock = clock
        self._last_accepted: float | None = None
        self._lock = threading.Lock()

    @property
    def cooldown_seconds(self) -> float:
        return self._cooldown

    def try_acquire(self) -> CooldownDecision:
        """
        Reserve the current window, or report how long until the next one.
        """
        with self._lock:
            now = self._clock()
            if self._last_accepted is not None:
                elapsed = now - self._last_accepted
                if elapsed < self._cooldown:
                    return CooldownDecision(
                        accepted=False, remaining_seconds=self._cooldown - elapsed
                    )
            self._last_accepted = now
            return CooldownDecision(accepted=True, token=now)

    def release(self, token: float | None) -> bool:
        """
        Undo a reservation whose downstream call failed.

        Only clears the window if it still belongs to *token*; returns
        whether it did.
        """
        if token is None:
            return False
        with self._lock:
            if self._last_accepted != token:
                return False
            self._last_accepted = None
            return True
