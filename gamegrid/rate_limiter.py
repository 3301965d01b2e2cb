import logging
import time
from threading import Lock
from typing import Callable, Dict

from gamegrid.models.schema_models import RateLimitRecordSchema


class RateLimiter:
    """Fixed-window request counter per client identity.

    A window opens on the first request after the previous one ran out; rejected
    requests do not count. ``sweep`` is run on a schedule to drop expired records.
    """

    def __init__(
        self,
        max_requests: int = 30,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self.records: Dict[str, RateLimitRecordSchema] = {}
        self._lock = Lock()

    def is_limited(self, client_id: str) -> bool:
        """Count a request for ``client_id`` and report whether it is over the limit."""
        now = self.clock()
        with self._lock:
            record = self.records.get(client_id)
            if record is None or now > record.window_reset_at:
                self.records[client_id] = RateLimitRecordSchema(
                    count=1, window_reset_at=now + self.window_seconds
                )
                return False
            if record.count >= self.max_requests:
                return True
            record.count += 1
            return False

    def sweep(self) -> int:
        """Remove records whose window has ended. Returns how many were removed."""
        now = self.clock()
        with self._lock:
            expired = [key for key, record in self.records.items() if now > record.window_reset_at]
            for key in expired:
                del self.records[key]
        if expired:
            logging.debug(f"Rate limiter sweep removed {len(expired)} records")
        return len(expired)
