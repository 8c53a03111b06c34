import threading
import time
from collections import deque
from typing import Deque, Dict


class RateLimiter:
    """Sliding one-minute window per client id."""

    def __init__(self, max_per_minute: int = 120, window: float = 60.0):
        self.max = max_per_minute
        self.window = window
        self.buckets: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        now = time.monotonic()
        with self._lock:
            bucket = self.buckets.setdefault(key, deque())
            # drop old
            while bucket and now - bucket[0] > self.window:
                bucket.popleft()
            if len(bucket) >= self.max:
                return False
            bucket.append(now)
            return True

    def remaining(self, key: str) -> int:
        with self._lock:
            bucket = self.buckets.get(key)
            used = len(bucket) if bucket else 0
        return max(0, self.max - used)
