from __future__ import annotations

import logging
from socketserver import ThreadingMixIn
from typing import Any, Callable, Iterable
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import CollectorRegistry, make_wsgi_app

log = logging.getLogger(__name__)

LANDING_PAGE = b"""<html>
<head><title>BGP Exporter</title></head>
<body>
<h1>BGP Exporter</h1>
<p><a href='/metrics'>Metrics</a></p>
</body>
</html>
"""


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _QuietHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:
        log.debug("%s %s", self.address_string(), format % args)


def make_app(registry: CollectorRegistry) -> Callable[..., Iterable[bytes]]:
    metrics_app = make_wsgi_app(registry)

    def app(environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        path = environ.get("PATH_INFO", "/")
        if path == "/metrics":
            return metrics_app(environ, start_response)
        if path == "/":
            start_response("200 OK", [("Content-Type", "text/html; charset=utf-8")])
            return [LANDING_PAGE]
        start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
        return [b"Not Found\n"]

    return app


def make_http_server(registry: CollectorRegistry, address: str, port: int) -> WSGIServer:
    server = make_server(address, port, make_app(registry), _ThreadingWSGIServer, handler_class=_QuietHandler)
    log.info("serving metrics on http://%s:%d/metrics", address, port)
    return server
