"""Process-wide record of scripts proven to be in use."""

import threading
from typing import FrozenSet, Set


class UsageRegistry:
    """Thread-safe, add-only set of used script paths."""

    def __init__(self):
        self._used: Set[str] = set()
        self._lock = threading.Lock()

    def add(self, script_path: str) -> bool:
        """Mark a script used. Returns True if it was not already marked."""
        with self._lock:
            if script_path in self._used:
                return False
            self._used.add(script_path)
            return True

    def __contains__(self, script_path: object) -> bool:
        with self._lock:
            return script_path in self._used

    def __len__(self) -> int:
        with self._lock:
            return len(self._used)

    def snapshot(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._used)
