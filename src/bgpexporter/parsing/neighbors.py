from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from ipaddress import IPv4Address, IPv6Address

from bgpexporter.core.model import NeighborRecord, SessionState
from bgpexporter.parsing.classifier import LineKind, classify_line

log = logging.getLogger(__name__)


class ParserState(str, Enum):
    IDLE = "idle"
    COLLECTING = "collecting"


@dataclass(slots=True)
class _Pending:
    identity: IPv4Address | IPv6Address
    session_state: SessionState | None = None
    accepted_prefixes: int = 0
    line_no: int = 0

    def commit(self, established: int, dropped: int) -> NeighborRecord:
        return NeighborRecord(
            identity=self.identity,
            session_state=self.session_state,
            accepted_prefixes=self.accepted_prefixes,
            connections_established=established,
            connections_dropped=dropped,
        )


class NeighborParser:
    """Walks a ``show ip bgp neighbors`` block one line at a time.

    IDLE waits for a neighbor header. COLLECTING fills the pending record for
    that neighbor until the connections line, which commits it and returns to
    IDLE. A new header while COLLECTING drops the unfinished record.
    """

    def __init__(self) -> None:
        self.state = ParserState.IDLE
        self.records: list[NeighborRecord] = []
        self.dropped = 0
        self._pending: _Pending | None = None
        self._line_no = 0

    def feed(self, line: str) -> NeighborRecord | None:
        self._line_no += 1
        item = classify_line(line)
        if item is None:
            return None
        if item.kind is LineKind.NEIGHBOR_HEADER:
            if item.address is not None:
                self._open(item.address)
            return None
        pending = self._pending
        if self.state is not ParserState.COLLECTING or pending is None:
            return None
        if item.kind is LineKind.SESSION_STATE:
            if item.state is not None:
                pending.session_state = item.state
            return None
        if item.kind is LineKind.ACCEPTED_PREFIXES:
            pending.accepted_prefixes = int(item.accepted_prefixes or 0)
            return None
        return self._commit(pending, int(item.established or 0), int(item.dropped or 0))

    def finish(self) -> list[NeighborRecord]:
        if self._pending is not None:
            self._discard(self._pending, "end of input")
        self.state = ParserState.IDLE
        return self.records

    def _open(self, address: IPv4Address | IPv6Address) -> None:
        if self._pending is not None:
            self._discard(self._pending, f"new header at line {self._line_no}")
        self._pending = _Pending(identity=address, line_no=self._line_no)
        self.state = ParserState.COLLECTING

    def _commit(self, pending: _Pending, established: int, dropped: int) -> NeighborRecord:
        record = pending.commit(established, dropped)
        self.records.append(record)
        self._pending = None
        self.state = ParserState.IDLE
        return record

    def _discard(self, pending: _Pending, reason: str) -> None:
        log.debug("dropping incomplete neighbor %s from line %d (%s)", pending.identity, pending.line_no, reason)
        self.dropped += 1
        self._pending = None
        self.state = ParserState.IDLE


def parse_neighbors(text: str) -> list[NeighborRecord]:
    parser = NeighborParser()
    for line in text.removesuffix("\n").split("\n"):
        parser.feed(line)
    return parser.finish()
