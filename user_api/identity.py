from __future__ import annotations

import threading


class IdentityGenerator:
    """Issues strictly increasing integer ids.

    Ids are never handed out twice, including after the record that held one
    has been deleted.
    """

    def __init__(self, start: int = 0):
        self._lock = threading.Lock()
        self._last = int(start)

    def next(self) -> int:
        with self._lock:
            self._last += 1
            return self._last

    @property
    def last_issued(self) -> int:
        with self._lock:
            return self._last
