from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from ipaddress import IPv4Address, IPv6Address
from typing import Any


class SessionState(IntEnum):
    """BGP FSM phase, numbered as in BGP4-MIB bgpPeerState."""

    IDLE = 1
    CONNECT = 2
    ACTIVE = 3
    OPENSENT = 4
    OPENCONFIRM = 5
    ESTABLISHED = 6


# Words exactly as vtysh prints them after "BGP state = ".
STATE_WORDS: dict[str, SessionState] = {
    "Idle": SessionState.IDLE,
    "Connect": SessionState.CONNECT,
    "Active": SessionState.ACTIVE,
    "Opensent": SessionState.OPENSENT,
    "Openconfirm": SessionState.OPENCONFIRM,
    "Established": SessionState.ESTABLISHED,
}


@dataclass(slots=True, frozen=True)
class NeighborRecord:
    identity: IPv4Address | IPv6Address
    session_state: SessionState | None = None
    accepted_prefixes: int = 0
    connections_established: int = 0
    connections_dropped: int = 0

    @property
    def key(self) -> str:
        return str(self.identity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ip": self.key,
            "state": int(self.session_state) if self.session_state is not None else None,
            "state_name": self.session_state.name.lower() if self.session_state is not None else None,
            "accepted_prefixes": self.accepted_prefixes,
            "connections_established": self.connections_established,
            "connections_dropped": self.connections_dropped,
        }
