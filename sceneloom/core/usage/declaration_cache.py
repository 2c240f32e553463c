"""Thread-safe, single-flight cache of script declaration scans.

Scripts are immutable for the duration of a run, so entries never expire.
The first caller for a path performs the scan; concurrent callers for the
same path block until that scan finishes and then share its result.

Usage:
    cache = DeclarationCache()
    result = cache.get("/project/Assets/Player.cs")  # scans once
    names = cache.fields("/project/Assets/Player.cs")  # frozenset or None
"""

import logging
import threading
from functools import partial
from typing import Callable, Dict, FrozenSet, Iterable, Optional

from ..ast_parser import DeclarationResult, ParseError, parse_file

logger = logging.getLogger(__name__)


class _Slot:
    """One cache entry; `ready` is set once `result` is final."""

    __slots__ = ("ready", "result")

    def __init__(self):
        self.ready = threading.Event()
        self.result: Optional[DeclarationResult] = None


class DeclarationCache:
    """Per-script memo of DeclarationResult with at-most-once extraction.

    Attributes:
        extractor: Callable scanning one script path
    """

    def __init__(
        self,
        extractor: Optional[Callable[[str], DeclarationResult]] = None,
        serializable_modifiers: Iterable[str] = ("public",),
        serialization_attribute: str = "SerializeField",
    ):
        """Initialize the cache.

        Args:
            extractor: Scan function, defaults to ast_parser.parse_file with
                the given serialization rules
            serializable_modifiers: Modifiers that make a field assignable
            serialization_attribute: Attribute name that forces a field assignable
        """
        if extractor is None:
            extractor = partial(
                parse_file,
                serializable_modifiers=tuple(serializable_modifiers),
                serialization_attribute=serialization_attribute,
            )
        self.extractor = extractor
        self._slots: Dict[str, _Slot] = {}
        self._lock = threading.Lock()
        self._extractions = 0
        self._failures = 0

    def get(self, script_path: str) -> DeclarationResult:
        """Get the declaration scan for a script, scanning it at most once.

        Args:
            script_path: Source location of the script

        Returns:
            DeclarationResult (check `.ok` before trusting its fields)
        """
        with self._lock:
            slot = self._slots.get(script_path)
            owner = slot is None
            if owner:
                slot = _Slot()
                self._slots[script_path] = slot
                self._extractions += 1

        if owner:
            try:
                slot.result = self._extract(script_path)
            finally:
                slot.ready.set()
        else:
            slot.ready.wait()

        return slot.result

    def fields(self, script_path: str) -> Optional[FrozenSet[str]]:
        """Serializable field names, or None when the script failed to scan."""
        result = self.get(script_path)
        if not result.ok:
            return None
        return result.serializable_names

    def _extract(self, script_path: str) -> DeclarationResult:
        try:
            result = self.extractor(script_path)
        except Exception as e:
            logger.warning(f"Declaration scan failed for {script_path}: {e}")
            result = DeclarationResult(
                file_path=script_path,
                language="unknown",
                fields=[],
                errors=[ParseError(file_path=script_path, line=0, message=str(e), severity="error")],
            )

        if not result.ok:
            with self._lock:
                self._failures += 1
            logger.warning(f"Excluding {script_path} from usage checks: {result.errors[0].message}")
        else:
            logger.debug(f"Scanned {script_path}: {len(result.serializable_names)} serializable fields")
        return result

    def get_stats(self) -> Dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with entries, extractions and failures
        """
        with self._lock:
            return {
                "entries": len(self._slots),
                "extractions": self._extractions,
                "failures": self._failures,
            }
