"""Daily quota tracking: caps the quantity ordered per product per UTC day.

Usage is counted for every order that passes validation, regardless of how
payment turns out later, and is never given back on cancellation.
"""

import threading
from collections.abc import Callable
from datetime import UTC, date, datetime

import structlog

from ordering.utils.clock import utc_now

logger = structlog.get_logger(__name__)

DEFAULT_DAILY_LIMIT = 100


class DailyQuotaTracker:
    """Cumulative per-(product, day) counters with a fixed upper bound."""

    def __init__(
        self,
        limit: int = DEFAULT_DAILY_LIMIT,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if limit < 0:
            raise ValueError("Quota limit cannot be negative")
        self.limit = limit
        self._clock = clock
        self._lock = threading.Lock()
        self._usage: dict[tuple[str, date], int] = {}

    def _day(self, on: date | None) -> date:
        if on is not None:
            return on
        return self._clock().astimezone(UTC).date()

    def usage(self, product: str, on: date | None = None) -> int:
        """Quantity already recorded for ``product`` on the given UTC day."""
        with self._lock:
            return self._usage.get((product, self._day(on)), 0)

    def remaining(self, product: str, on: date | None = None) -> int:
        return max(self.limit - self.usage(product, on), 0)

    def would_exceed(self, product: str, quantity: int, on: date | None = None) -> bool:
        return self.usage(product, on) + quantity > self.limit

    def record(self, product: str, quantity: int, on: date | None = None) -> int:
        """Add ``quantity`` to the day's bucket and return the new total."""
        if quantity <= 0:
            raise ValueError("Recorded quantity must be positive")

        key = (product, self._day(on))
        with self._lock:
            total = self._usage.get(key, 0) + quantity
            self._usage[key] = total

        logger.debug(
            "Quota usage recorded",
            product=product,
            day=key[1].isoformat(),
            quantity=quantity,
            total=total,
            limit=self.limit,
        )
        return total

    def purge_before(self, day: date) -> int:
        """Drop buckets for days strictly before ``day``. Returns how many were removed."""
        with self._lock:
            stale = [key for key in self._usage if key[1] < day]
            for key in stale:
                del self._usage[key]
        return len(stale)
