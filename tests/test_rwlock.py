import threading

from bgpexporter.utils.rwlock import ReadWriteLock


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    inside = threading.Barrier(3, timeout=5)

    def reader() -> None:
        with lock.read():
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)
    assert not inside.broken


def test_writer_waits_for_readers() -> None:
    lock = ReadWriteLock()
    order: list[str] = []
    lock.acquire_read()

    def writer() -> None:
        with lock.write():
            order.append("write")

    t = threading.Thread(target=writer)
    t.start()
    t.join(0.1)
    order.append("read-done")
    lock.release_read()
    t.join(5)
    assert order == ["read-done", "write"]
