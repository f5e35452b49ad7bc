"""
ScanInfoCache - bounded mapping from scan number to ScanInfo.

Entries are evicted oldest-first by the time they were cached.  The cache
is not synchronized; callers sharing it across threads must serialize
every call.
"""

import logging
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Dict, Optional

from thermo_filter.config import DEFAULT_SCAN_INFO_CACHE_SIZE
from thermo_filter.scan.models import ScanInfo

logger = logging.getLogger(__name__)


class ScanInfoCache:
    """
    Capacity-bounded scan metadata cache.

    A capacity of 0 disables caching: puts are ignored and every lookup
    misses.  Negative capacities are clamped to 0.
    """

    def __init__(self, max_size: int = DEFAULT_SCAN_INFO_CACHE_SIZE):
        # Insertion order is cache-timestamp order; a re-put moves to the end
        self._entries: "OrderedDict[int, ScanInfo]" = OrderedDict()
        self._max_size = max(max_size, 0)

    @property
    def max_size(self) -> int:
        """Maximum number of cached scans."""
        return self._max_size

    @max_size.setter
    def max_size(self, value: int) -> None:
        self._max_size = max(value, 0)

        if not self._entries:
            return

        if self._max_size == 0:
            self.clear()
        else:
            self._evict_over_limit(self._max_size)

    def put(self, scan_number: int, scan_info: ScanInfo) -> None:
        """
        Cache scan_info under scan_number with a fresh timestamp.

        Args:
            scan_number: Scan number key
            scan_info: Metadata to cache
        """
        if self._max_size == 0:
            return

        if scan_number in self._entries:
            del self._entries[scan_number]

        self._evict_over_limit(self._max_size - 1)

        scan_info.cache_date_utc = datetime.now(timezone.utc)
        self._entries[scan_number] = scan_info

    def get(self, scan_number: int) -> Optional[ScanInfo]:
        """Return the cached ScanInfo, or None on a miss."""
        return self._entries.get(scan_number)

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def snapshot(self) -> Dict[int, ScanInfo]:
        """Copy of the current entries, oldest first."""
        return dict(self._entries)

    def _evict_over_limit(self, limit: int) -> None:
        evicted = 0
        while len(self._entries) > limit:
            self._entries.popitem(last=False)
            evicted += 1

        if evicted:
            logger.debug(f"Evicted {evicted} cached scan(s); {len(self._entries)} remain")

    def __contains__(self, scan_number: int) -> bool:
        return scan_number in self._entries

    def __len__(self) -> int:
        return len(self._entries)
