from __future__ import annotations

from collections.abc import Iterator

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from bgpexporter.core.store import SampleStore

LABELS = ["ip"]


class BgpNeighborCollector(Collector):
    """Reads one store snapshot per scrape and renders the neighbor gauges."""

    def __init__(self, store: SampleStore) -> None:
        self.store = store

    def collect(self) -> Iterator[GaugeMetricFamily]:
        state = GaugeMetricFamily(
            "bgp_neighbor_state",
            "The state of the connection to a given BGP neighbor "
            "(1=idle,2=connect,3=active,4=opensent,5=openconfirm,6=established)",
            labels=LABELS,
        )
        prefixes = GaugeMetricFamily(
            "bgp_neighbor_accepted_prefixes",
            "The number of accepted prefixes for a given BGP neighbor",
            labels=LABELS,
        )
        established = GaugeMetricFamily(
            "bgp_neighbor_connections_established",
            "The number of connections that have been established for a given BGP neighbor",
            labels=LABELS,
        )
        dropped = GaugeMetricFamily(
            "bgp_neighbor_connections_dropped",
            "The number of connections that have been dropped for a given BGP neighbor",
            labels=LABELS,
        )

        for record in sorted(self.store.snapshot(), key=lambda r: r.key):
            labels = [record.key]
            if record.session_state is not None:
                state.add_metric(labels, int(record.session_state))
            prefixes.add_metric(labels, record.accepted_prefixes)
            established.add_metric(labels, record.connections_established)
            dropped.add_metric(labels, record.connections_dropped)

        yield state
        yield prefixes
        yield established
        yield dropped

    def describe(self) -> Iterator[GaugeMetricFamily]:
        # Empty families so registration does not trigger a store read.
        yield GaugeMetricFamily("bgp_neighbor_state", "", labels=LABELS)
        yield GaugeMetricFamily("bgp_neighbor_accepted_prefixes", "", labels=LABELS)
        yield GaugeMetricFamily("bgp_neighbor_connections_established", "", labels=LABELS)
        yield GaugeMetricFamily("bgp_neighbor_connections_dropped", "", labels=LABELS)
