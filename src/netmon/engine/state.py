from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass
class StopToken:
    """
    Cancellation flag shared by the signal handlers and the sampling loop.

    `set()` is a plain attribute write, so it is safe to call from a signal
    handler at any point; `wait()` polls in short slices instead of blocking
    on a lock the handler might need.
    """

    poll_seconds: float = 0.1
    _stopped: bool = False

    def set(self) -> None:
        self._stopped = True

    def is_set(self) -> bool:
        return self._stopped

    def wait(self, timeout: float) -> bool:
        deadline = time.monotonic() + max(float(timeout), 0.0)
        while not self._stopped:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            time.sleep(min(self.poll_seconds, remaining))
        return self._stopped
