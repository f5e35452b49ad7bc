"""
Tests for ScanInfoCache - bounded scan metadata cache.
"""

import pytest

from thermo_filter.config import DEFAULT_SCAN_INFO_CACHE_SIZE
from thermo_filter.scan.cache import ScanInfoCache
from thermo_filter.scan.models import ScanInfo


def _fill(cache, scan_numbers):
    for scan_number in scan_numbers:
        cache.put(scan_number, ScanInfo(scan_number=scan_number))


class TestScanInfoCache:
    """Tests for ScanInfoCache class."""

    def test_default_size(self):
        """Test the default capacity."""
        assert ScanInfoCache().max_size == DEFAULT_SCAN_INFO_CACHE_SIZE

    def test_put_and_get(self):
        """Test that a cached entry is returned with a timestamp."""
        cache = ScanInfoCache(10)
        scan_info = ScanInfo(scan_number=7)
        cache.put(7, scan_info)

        assert cache.get(7) is scan_info
        assert scan_info.cache_date_utc is not None
        assert 7 in cache
        assert cache.get(8) is None

    def test_evicts_oldest(self):
        """Test that inserting capacity + 1 scans evicts the oldest."""
        cache = ScanInfoCache(3)
        _fill(cache, [1, 2, 3, 4])

        assert len(cache) == 3
        assert 1 not in cache
        assert list(cache.snapshot()) == [2, 3, 4]

    def test_reinsert_refreshes_age(self):
        """Test that re-caching a scan makes it the newest entry."""
        cache = ScanInfoCache(3)
        _fill(cache, [1, 2, 3, 1, 4])

        assert list(cache.snapshot()) == [3, 1, 4]

    def test_zero_capacity_disables(self):
        """Test that a capacity of zero keeps nothing."""
        cache = ScanInfoCache(0)
        _fill(cache, [1, 2])

        assert len(cache) == 0
        assert cache.get(1) is None

    def test_negative_capacity_clamped(self):
        """Test that a negative capacity becomes zero."""
        cache = ScanInfoCache(-5)

        assert cache.max_size == 0
        _fill(cache, [1])
        assert len(cache) == 0

    def test_shrink_evicts_oldest(self):
        """Test that shrinking the capacity evicts the oldest entries."""
        cache = ScanInfoCache(5)
        _fill(cache, [1, 2, 3, 4, 5])

        cache.max_size = 2

        assert list(cache.snapshot()) == [4, 5]

    def test_shrink_to_zero_clears(self):
        """Test that a capacity of zero empties the cache."""
        cache = ScanInfoCache(5)
        _fill(cache, [1, 2, 3])

        cache.max_size = 0

        assert len(cache) == 0

    def test_grow_keeps_entries(self):
        """Test that growing the capacity evicts nothing."""
        cache = ScanInfoCache(2)
        _fill(cache, [1, 2])

        cache.max_size = 10
        _fill(cache, [3])

        assert list(cache.snapshot()) == [1, 2, 3]

    def test_clear(self):
        """Test clearing the cache."""
        cache = ScanInfoCache(5)
        _fill(cache, [1, 2])

        cache.clear()

        assert len(cache) == 0

    @pytest.mark.slow
    def test_default_capacity_bound(self):
        """Test the bound at the default capacity."""
        cache = ScanInfoCache()
        _fill(cache, range(1, DEFAULT_SCAN_INFO_CACHE_SIZE + 2))

        assert len(cache) == DEFAULT_SCAN_INFO_CACHE_SIZE
        assert 1 not in cache
        assert DEFAULT_SCAN_INFO_CACHE_SIZE + 1 in cache
