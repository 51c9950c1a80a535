"""In-memory store for pending OAuth ``state`` values."""

import time
from typing import Callable

# Pending authorization states expire after this many seconds
STATE_TTL_SECONDS = 600


class PendingStates:
    """States issued by ``initiate_authorization`` and not yet used.

    Expired entries are pruned whenever a new state is issued, so abandoned
    sign-ins do not accumulate. Single process only.
    """

    def __init__(
        self,
        ttl: float = STATE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.clock = clock
        self._issued: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._issued)

    def add(self, state: str) -> None:
        now = self.clock()
        self._issued = {
            key: issued_at
            for key, issued_at in self._issued.items()
            if now - issued_at <= self.ttl
        }
        self._issued[state] = now

    def consume(self, state: str) -> bool:
        """Remove ``state`` and report whether it was issued and still fresh."""
        issued_at = self._issued.pop(state, None)
        return issued_at is not None and self.clock() - issued_at <= self.ttl
