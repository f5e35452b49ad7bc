"""In-memory scan source."""

from typing import Dict, Iterable

from thermo_filter.source.base import RawScanRecord, RawScanSource, filter_is_ftms


class MemoryScanSource(RawScanSource):
    """Source over records that are already in memory."""

    def __init__(self, records: Iterable[RawScanRecord]):
        super().__init__()
        self._initial = list(records)

    @classmethod
    def from_filters(cls, filter_texts: Iterable[str], first_scan: int = 1) -> "MemoryScanSource":
        """
        Build a source with one scan per filter text.

        Args:
            filter_texts: Filter strings in scan order
            first_scan: Scan number of the first filter

        Returns:
            MemoryScanSource
        """
        records = [
            RawScanRecord(
                scan_number=first_scan + offset,
                filter_text=text,
                is_ftms=filter_is_ftms(text),
            )
            for offset, text in enumerate(filter_texts)
        ]
        return cls(records)

    def _load_records(self) -> Dict[int, RawScanRecord]:
        return {record.scan_number: record for record in self._initial}
