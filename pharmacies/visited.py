"""
Purpose: The "visited" flag store.
What it does:
Keeps the set of pharmacy CIPs a user has already visited.

The matching engine only reads it (membership test on a snapshot taken at
request start). Writes come from the mark/unmark API and replace the whole
file atomically, so a concurrent reader sees either the old or the new set.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from typing import FrozenSet, Iterable, Protocol

from dotenv import load_dotenv

load_dotenv()
DEFAULT_VISITED_PATH = os.getenv("VISITED_PATH", "data/visited.json")

logger = logging.getLogger(__name__)


class VisitedStore(Protocol):
    def __contains__(self, cip: object) -> bool:
        ...

    def snapshot(self) -> FrozenSet[str]:
        ...

    def mark(self, cip: str) -> None:
        ...

    def unmark(self, cip: str) -> None:
        ...


class InMemoryVisitedStore:
    """Process-local visited set. Used by tests and when no file is configured."""

    def __init__(self, cips: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._cips: FrozenSet[str] = frozenset(cips)

    def __contains__(self, cip: object) -> bool:
        return cip in self._cips

    def snapshot(self) -> FrozenSet[str]:
        return self._cips

    def mark(self, cip: str) -> None:
        with self._lock:
            self._cips = self._cips | {cip}

    def unmark(self, cip: str) -> None:
        with self._lock:
            self._cips = self._cips - {cip}


class JsonVisitedStore:
    """
    Visited set persisted as a JSON list of CIPs.

    A missing file is an empty set. An unreadable file reads as empty but
    mark/unmark refuse to overwrite it.
    """

    def __init__(self, path: str = DEFAULT_VISITED_PATH):
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> FrozenSet[str]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return frozenset()

        if not isinstance(data, list):
            raise ValueError(f"{self.path}: expected a JSON list of CIPs")
        return frozenset(str(cip) for cip in data)

    def _write(self, cips: FrozenSet[str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".visited-", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(sorted(cips), f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def _read_for_lookup(self) -> FrozenSet[str]:
        # writes still go through _read and refuse to overwrite a corrupt file
        try:
            return self._read()
        except ValueError as exc:
            logger.error("Ignoring unreadable visited file %s: %s", self.path, exc)
            return frozenset()

    def __contains__(self, cip: object) -> bool:
        return cip in self._read_for_lookup()

    def snapshot(self) -> FrozenSet[str]:
        return self._read_for_lookup()

    def mark(self, cip: str) -> None:
        with self._lock:
            cips = self._read()
            if cip not in cips:
                self._write(cips | {cip})
                logger.info("Marked pharmacy %s as visited", cip)

    def unmark(self, cip: str) -> None:
        with self._lock:
            cips = self._read()
            if cip in cips:
                self._write(cips - {cip})
                logger.info("Cleared visited flag for pharmacy %s", cip)
