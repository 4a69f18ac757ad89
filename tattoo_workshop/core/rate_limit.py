# tattoo_workshop/core/rate_limit.py
"""
Per-email login rate limiting.

Policy:
  - 5 failed logins within a rolling 15 minute window lock the email
    for 15 minutes.
  - While locked, every attempt is refused with the remaining lockout
    time (rounded up to whole minutes).
  - A successful login clears the email's entry.

Attempt state sits behind `LoginAttemptStore` so the process-local
default can be swapped for a shared backend (e.g. Redis) without
touching the login route.
"""

import math
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

MAX_ATTEMPTS = 5
ATTEMPT_WINDOW_SECONDS = 15 * 60
LOCKOUT_SECONDS = 15 * 60


@dataclass
class AttemptRecord:
    failures: list[float] = field(default_factory=list)
    locked_until: float = 0.0


@dataclass
class RateLimitDecision:
    allowed: bool
    message: str | None = None
    retry_after_seconds: int = 0


class LoginAttemptStore(Protocol):
    def get(self, key: str) -> AttemptRecord | None: ...

    def put(self, key: str, record: AttemptRecord) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryLoginAttemptStore:
    """
    Process-local store. Restarting the process clears every lockout,
    and separate worker processes do not share counters.
    """

    def __init__(self) -> None:
        self._records: dict[str, AttemptRecord] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> AttemptRecord | None:
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return None
            return AttemptRecord(list(record.failures), record.locked_until)

    def put(self, key: str, record: AttemptRecord) -> None:
        with self._lock:
            self._records[key] = record

    def delete(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)


class LoginRateLimiter:
    def __init__(
        self,
        store: LoginAttemptStore | None = None,
        max_attempts: int = MAX_ATTEMPTS,
        window_seconds: int = ATTEMPT_WINDOW_SECONDS,
        lockout_seconds: int = LOCKOUT_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store or InMemoryLoginAttemptStore()
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.lockout_seconds = lockout_seconds
        self.clock = clock

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    def check(self, email: str) -> RateLimitDecision:
        """Decide whether a login attempt for `email` may proceed."""
        now = self.clock()
        record = self.store.get(self._key(email))
        if record is None or record.locked_until <= now:
            return RateLimitDecision(allowed=True)

        remaining = record.locked_until - now
        minutes = math.ceil(remaining / 60)
        return RateLimitDecision(
            allowed=False,
            message=f"Account locked. Try again in {minutes} minute(s)",
            retry_after_seconds=math.ceil(remaining),
        )

    def record_failure(self, email: str) -> None:
        """Count a failed attempt; lock the email once the limit is reached."""
        now = self.clock()
        key = self._key(email)
        record = self.store.get(key) or AttemptRecord()

        cutoff = now - self.window_seconds
        record.failures = [t for t in record.failures if t > cutoff]
        record.failures.append(now)

        if len(record.failures) >= self.max_attempts:
            record.locked_until = now + self.lockout_seconds
            record.failures = []

        self.store.put(key, record)

    def record_success(self, email: str) -> None:
        self.store.delete(self._key(email))

    def failure_count(self, email: str) -> int:
        record = self.store.get(self._key(email))
        return len(record.failures) if record else 0


login_rate_limiter = LoginRateLimiter()


def get_login_rate_limiter() -> LoginRateLimiter:
    """FastAPI dependency returning the process-wide limiter."""
    return login_rate_limiter
