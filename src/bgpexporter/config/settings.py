from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(slots=True, frozen=True)
class ExporterSettings:
    listen_address: str = "0.0.0.0"
    port: int = 9114
    poll_interval: float = 10.0
    vtysh_bin: str = "vtysh"
    command: str = "show ip bgp neighbors"
    command_timeout: float = 5.0
    container: str | None = None

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}
