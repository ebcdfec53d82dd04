from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from prometheus_client import CollectorRegistry, Counter, Gauge

from bgpexporter.core.errors import AcquisitionError
from bgpexporter.core.store import SampleStore
from bgpexporter.parsing.neighbors import parse_neighbors

log = logging.getLogger(__name__)

TextSource = Callable[[], str]


class PollLoop:
    """Fetches router output every ``interval`` seconds and upserts the parsed records.

    A failed fetch skips the cycle. Stored samples are never cleared.
    """

    def __init__(
        self,
        source: TextSource,
        store: SampleStore,
        interval: float = 10.0,
        registry: CollectorRegistry | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.source = source
        self.store = store
        self.clock = clock
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

        self._polls = Counter("bgp_exporter_polls", "Number of router polls attempted", registry=registry)
        self._failures = Counter(
            "bgp_exporter_poll_failures", "Number of router polls that could not obtain output", registry=registry
        )
        self._duration = Gauge(
            "bgp_exporter_last_poll_duration_seconds", "Duration of the most recent poll", registry=registry
        )
        self._neighbors = Gauge(
            "bgp_exporter_last_poll_neighbors", "Neighbors committed by the most recent successful poll", registry=registry
        )

    def poll_once(self) -> bool:
        self._polls.inc()
        started = self.clock()
        try:
            try:
                text = self.source()
            except AcquisitionError as exc:
                self._failures.inc()
                log.warning("skipping poll: %s", exc)
                return False

            records = parse_neighbors(text)
            count = self.store.upsert_all(records)
        finally:
            self._duration.set(self.clock() - started)

        self._neighbors.set(count)
        log.debug("poll committed %d neighbors, %d known", count, len(self.store))
        return True

    def run_forever(self) -> None:
        while not self._stop.is_set():
            try:
                self.poll_once()
            except Exception:
                log.exception("poll crashed; keeping previous samples")
            self._stop.wait(self.interval)

    def start(self) -> threading.Thread:
        self._thread = threading.Thread(target=self.run_forever, name="bgp-poller", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
