from __future__ import annotations

import logging
from pathlib import Path

import typer
from prometheus_client import CollectorRegistry

from bgpexporter.adapters.vtysh import VtyshAdapter
from bgpexporter.config.loader import load_settings
from bgpexporter.config.settings import ExporterSettings
from bgpexporter.core.errors import ConfigError
from bgpexporter.core.logging import configure_logging
from bgpexporter.core.model import NeighborRecord
from bgpexporter.core.store import SampleStore
from bgpexporter.exposition.collector import BgpNeighborCollector
from bgpexporter.exposition.http import make_http_server
from bgpexporter.parsing.neighbors import parse_neighbors
from bgpexporter.polling.loop import PollLoop
from bgpexporter.render.report_json import records_payload, write_json_report

app = typer.Typer(add_completion=False)
log = logging.getLogger(__name__)


def _settings(config: Path | None, **overrides) -> ExporterSettings:
    try:
        return load_settings(config, **overrides)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _format_record(record: NeighborRecord) -> str:
    state = record.session_state.name.lower() if record.session_state is not None else "unknown"
    return (
        f"{record.key:<40} state={state} prefixes={record.accepted_prefixes} "
        f"established={record.connections_established} dropped={record.connections_dropped}"
    )


@app.command()
def serve(
    config: Path | None = typer.Option(None, "--config", exists=True, dir_okay=False),
    listen_address: str | None = typer.Option(None, "--listen-address"),
    port: int | None = typer.Option(None, "--port"),
    interval: float | None = typer.Option(None, "--interval"),
    vtysh_bin: str | None = typer.Option(None, "--vtysh-bin"),
    container: str | None = typer.Option(None, "--container"),
    timeout: float | None = typer.Option(None, "--timeout"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    configure_logging(verbose)
    settings = _settings(
        config,
        listen_address=listen_address,
        port=port,
        poll_interval=interval,
        vtysh_bin=vtysh_bin,
        container=container,
        command_timeout=timeout,
    )

    store = SampleStore()
    registry = CollectorRegistry()
    registry.register(BgpNeighborCollector(store))
    poller = PollLoop(VtyshAdapter(settings).fetch, store, settings.poll_interval, registry=registry)

    server = make_http_server(registry, settings.listen_address, settings.port)
    poller.start()
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        log.info("shutting down")
    finally:
        poller.stop(timeout=settings.command_timeout)
        server.server_close()


@app.command()
def parse(
    capture: Path = typer.Argument(..., exists=True, dir_okay=False),
    json_out: Path | None = typer.Option(None, "--json-out"),
) -> None:
    records = parse_neighbors(capture.read_text(encoding="utf-8"))
    for record in records:
        typer.echo(_format_record(record))
    typer.echo(f"Neighbors: {len(records)}")
    if json_out is not None:
        write_json_report(records_payload(records), json_out)


if __name__ == "__main__":
    app()
