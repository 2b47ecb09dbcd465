"""Single-slot daily cache for boundary times.

A record is a cache key plus one BoundarySet. A lookup only returns the
boundaries when the stored key is exactly the requested one; writing replaces
whatever record was there before.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

from src.errors import CacheCorruptError, CacheError
from src.models import BoundarySet, Location


def cache_key(location: Location, twilight: str, day: date) -> str:
    """Encode (location, twilight type, local calendar date) as an opaque key."""
    return (
        f"lat={location.latitude}&lng={location.longitude}"
        f"&twilight={twilight}&date={day.isoformat()}"
    )


class DailyCache(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[BoundarySet]:
        """Return the cached boundaries for ``key``, or None on a miss."""

    @abstractmethod
    def put(self, key: str, boundaries: BoundarySet) -> None:
        """Store ``boundaries`` under ``key``, overwriting the previous record."""


class MemoryDailyCache(DailyCache):
    def __init__(self, key: Optional[str] = None, value_line: Optional[str] = None):
        self._record: Optional[Tuple[str, str]] = None
        if key is not None and value_line is not None:
            self._record = (key, value_line)
        self.writes = 0

    def get(self, key: str) -> Optional[BoundarySet]:
        if self._record is None or self._record[0] != key:
            return None
        return BoundarySet.from_csv(self._record[1])

    def put(self, key: str, boundaries: BoundarySet) -> None:
        self._record = (key, boundaries.to_csv())
        self.writes += 1


class FileDailyCache(DailyCache):
    """Cache stored as a two-line text file: the key, then ``dawn,sunrise,sunset,dusk``.

    There is no locking; concurrent runs race and the last writer wins.
    """

    def __init__(self, path):
        self.path = Path(path)

    def get(self, key: str) -> Optional[BoundarySet]:
        if not self.path.exists():
            logging.debug(f"Cache file missing: {self.path}")
            return None
        try:
            lines = self.path.read_text().splitlines()
        except OSError as e:
            raise CacheError(f"cannot read cache file: {e}") from e
        except UnicodeDecodeError as e:
            raise CacheCorruptError(f"invalid cache file: {e}") from e
        if not lines or lines[0] != key:
            return None
        value_line = lines[-1] if len(lines) > 1 else ""
        return BoundarySet.from_csv(value_line)

    def put(self, key: str, boundaries: BoundarySet) -> None:
        try:
            self.path.write_text(f"{key}\n{boundaries.to_csv()}\n")
        except OSError as e:
            raise CacheError(f"cannot write cache file: {e}") from e
