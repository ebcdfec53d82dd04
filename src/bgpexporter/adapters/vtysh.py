from __future__ import annotations

import logging
import subprocess

from bgpexporter.adapters.base import CmdResult
from bgpexporter.config.settings import ExporterSettings
from bgpexporter.core.errors import AcquisitionError

log = logging.getLogger(__name__)


class VtyshAdapter:
    """Runs the neighbor command through vtysh, locally or inside a container."""

    def __init__(self, settings: ExporterSettings) -> None:
        self.vtysh_bin = settings.vtysh_bin
        self.command = settings.command
        self.timeout = settings.command_timeout
        self.container = settings.container

    def argv(self) -> list[str]:
        base = [self.vtysh_bin, "-c", self.command]
        if self.container:
            return ["docker", "exec", self.container, *base]
        return base

    def run(self) -> CmdResult:
        argv = self.argv()
        try:
            # vtysh output is UTF-8; undecodable bytes become U+FFFD.
            p = subprocess.run(
                argv, capture_output=True, text=True, encoding="utf-8", errors="replace", timeout=self.timeout
            )
        except subprocess.TimeoutExpired as exc:
            raise AcquisitionError(f"{' '.join(argv)!r} timed out after {self.timeout:g}s") from exc
        except OSError as exc:
            raise AcquisitionError(f"Failed to execute {argv[0]}: {exc}") from exc
        return CmdResult(p.returncode, p.stdout, p.stderr.strip())

    def fetch(self) -> str:
        r = self.run()
        if not r.ok:
            raise AcquisitionError(f"vtysh exited with {r.rc}: {r.stderr or 'no stderr'}")
        if r.stderr:
            log.debug("vtysh stderr: %s", r.stderr)
        return r.stdout
