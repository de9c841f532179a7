from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True, slots=True)
class LockoutPolicy:
    """Consecutive-failure lockout for sign-in.

    Semantics:
    - An account is locked while locked_until is set and strictly later than now.
    - The Nth consecutive wrong password (N = max_attempts) locks the account
      for lockout_minutes.
    - A successful login or password reset clears both the counter and the lock.
    """

    max_attempts: int = 5
    lockout_minutes: int = 15

    def is_locked(self, locked_until: datetime | None, now: datetime) -> bool:
        return locked_until is not None and locked_until > now

    def remaining_minutes(self, locked_until: datetime, now: datetime) -> int:
        return math.ceil((locked_until - now).total_seconds() / 60)

    def register_failure(self, failed_attempts: int, now: datetime) -> tuple[int, datetime | None]:
        """Return the new counter and, when the limit is reached, the lock expiry."""
        attempts = failed_attempts + 1
        if attempts >= self.max_attempts:
            return attempts, now + timedelta(minutes=self.lockout_minutes)
        return attempts, None

    def attempts_remaining(self, failed_attempts: int) -> int:
        return max(self.max_attempts - failed_attempts, 0)
