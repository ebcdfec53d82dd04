from __future__ import annotations

from collections.abc import Iterable
from ipaddress import IPv4Address, IPv6Address, ip_address

from bgpexporter.core.model import NeighborRecord
from bgpexporter.utils.rwlock import ReadWriteLock


class SampleStore:
    """Latest committed record per neighbor, keyed by canonical address.

    Records are immutable, so replacing the dict entry replaces the whole
    sample at once. Entries never expire: a neighbor that disappears from the
    router output keeps its last value until the process restarts.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._records: dict[str, NeighborRecord] = {}

    def upsert(self, record: NeighborRecord) -> None:
        with self._lock.write():
            self._records[record.key] = record

    def upsert_all(self, records: Iterable[NeighborRecord]) -> int:
        count = 0
        with self._lock.write():
            for record in records:
                self._records[record.key] = record
                count += 1
        return count

    def snapshot(self) -> list[NeighborRecord]:
        with self._lock.read():
            return list(self._records.values())

    def get(self, identity: str | IPv4Address | IPv6Address) -> NeighborRecord | None:
        try:
            key = str(ip_address(str(identity)))
        except ValueError:
            return None
        with self._lock.read():
            return self._records.get(key)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._records)
