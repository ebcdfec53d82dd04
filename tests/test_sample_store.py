import threading
from ipaddress import ip_address

from bgpexporter.core.model import NeighborRecord, SessionState
from bgpexporter.core.store import SampleStore
from bgpexporter.parsing.neighbors import parse_neighbors


def _record(ip: str, n: int, state: SessionState | None = SessionState.ESTABLISHED) -> NeighborRecord:
    return NeighborRecord(ip_address(ip), state, n, n, n)


def test_upsert_inserts_then_replaces() -> None:
    store = SampleStore()
    store.upsert(_record("10.0.0.1", 1))
    store.upsert(_record("10.0.0.2", 2))
    store.upsert(_record("10.0.0.1", 7, SessionState.IDLE))
    assert len(store) == 2
    replaced = store.get("10.0.0.1")
    assert replaced == _record("10.0.0.1", 7, SessionState.IDLE)


def test_get_normalises_address() -> None:
    store = SampleStore()
    store.upsert(_record("2001:db8::1", 1))
    assert store.get("2001:0db8:0000::0001") is not None
    assert store.get("not-an-ip") is None


def test_second_poll_replaces_whole_record() -> None:
    store = SampleStore()
    first = """BGP neighbor is 10.0.0.1, remote AS 1
  BGP state = Established, up for 1d
  5 accepted prefixes
  Connections established 12; dropped 1
"""
    second = """BGP neighbor is 10.0.0.1, remote AS 1
  Connections established 13; dropped 2
"""
    store.upsert_all(parse_neighbors(first))
    store.upsert_all(parse_neighbors(second))
    [record] = store.snapshot()
    assert record.connections_established == 13
    assert record.connections_dropped == 2
    # no field from the first poll survives the replacement
    assert record.session_state is None
    assert record.accepted_prefixes == 0


def test_snapshot_is_a_copy() -> None:
    store = SampleStore()
    store.upsert(_record("10.0.0.1", 1))
    snap = store.snapshot()
    store.upsert(_record("10.0.0.2", 2))
    assert len(snap) == 1
    assert len(store.snapshot()) == 2


def test_snapshot_during_upserts_never_sees_mixed_fields() -> None:
    store = SampleStore()
    ips = [f"10.1.0.{i}" for i in range(1, 21)]
    stop = threading.Event()
    torn: list[NeighborRecord] = []

    def writer() -> None:
        for n in range(500):
            store.upsert_all(_record(ip, n) for ip in ips)
        stop.set()

    def reader() -> None:
        while not stop.is_set():
            for r in store.snapshot():
                if not (r.accepted_prefixes == r.connections_established == r.connections_dropped):
                    torn.append(r)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    w = threading.Thread(target=writer)
    for t in readers:
        t.start()
    w.start()
    w.join()
    for t in readers:
        t.join()

    assert torn == []
    assert {r.connections_dropped for r in store.snapshot()} == {499}
