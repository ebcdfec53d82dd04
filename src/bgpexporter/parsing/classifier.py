from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from ipaddress import IPv4Address, IPv6Address, ip_address

from bgpexporter.core.model import STATE_WORDS, SessionState

_NEIGHBOR_RE = re.compile(r"^BGP neighbor is ([0-9A-Fa-f.:]+), .*$")
_STATE_RE = re.compile(r"^\s+BGP state = (\w+)\b.*$")
_PREFIXES_RE = re.compile(r"^\s*(\d+) accepted prefixes\w*$")
_CONNECTIONS_RE = re.compile(r"^\s*Connections established (\d+); dropped (\d+).*$")


class LineKind(str, Enum):
    NEIGHBOR_HEADER = "neighbor_header"
    SESSION_STATE = "session_state"
    ACCEPTED_PREFIXES = "accepted_prefixes"
    CONNECTIONS = "connections"


@dataclass(slots=True, frozen=True)
class Classification:
    kind: LineKind
    address: IPv4Address | IPv6Address | None = None
    state: SessionState | None = None
    accepted_prefixes: int | None = None
    established: int | None = None
    dropped: int | None = None


def _header(line: str) -> Classification | None:
    m = _NEIGHBOR_RE.match(line)
    if not m:
        return None
    try:
        address = ip_address(m.group(1))
    except ValueError:
        return None
    return Classification(LineKind.NEIGHBOR_HEADER, address=address)


def _state(line: str) -> Classification | None:
    m = _STATE_RE.match(line)
    if not m:
        return None
    # Unknown words still classify; the parser treats a missing state as a no-op.
    return Classification(LineKind.SESSION_STATE, state=STATE_WORDS.get(m.group(1)))


def _prefixes(line: str) -> Classification | None:
    m = _PREFIXES_RE.match(line)
    if not m:
        return None
    return Classification(LineKind.ACCEPTED_PREFIXES, accepted_prefixes=int(m.group(1)))


def _connections(line: str) -> Classification | None:
    m = _CONNECTIONS_RE.match(line)
    if not m:
        return None
    return Classification(LineKind.CONNECTIONS, established=int(m.group(1)), dropped=int(m.group(2)))


_MATCHERS = (_header, _state, _prefixes, _connections)


def classify_line(line: str) -> Classification | None:
    """Classify one line of ``show ip bgp neighbors`` output, or return None."""
    for matcher in _MATCHERS:
        result = matcher(line)
        if result is not None:
            return result
    return None
