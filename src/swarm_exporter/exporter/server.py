"""HTTP endpoint serving the exposition text."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler, make_server

from prometheus_client import make_wsgi_app as make_prometheus_app
from prometheus_client.exposition import ThreadingWSGIServer
from prometheus_client.registry import CollectorRegistry

from swarm_exporter.config import Settings
from swarm_exporter.errors import ScrapeError

logger = logging.getLogger(__name__)

WSGIApp = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]


class _LoggingRequestHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


def make_wsgi_app(registry: CollectorRegistry, metrics_path: str = "/metrics") -> WSGIApp:
    """Serve ``registry`` at ``metrics_path``; a failed scrape becomes a 503."""
    inner = make_prometheus_app(registry)

    def app(environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        if environ.get("PATH_INFO", "/") != metrics_path:
            start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
            return [f"Metrics are served at {metrics_path}\n".encode()]
        try:
            return inner(environ, start_response)
        except ScrapeError as e:
            start_response("503 Service Unavailable", [("Content-Type", "text/plain; charset=utf-8")])
            return [f"scrape failed: {e}\n".encode()]

    return app


def serve(settings: Settings, registry: CollectorRegistry) -> None:
    """Block serving metrics until interrupted."""
    app = make_wsgi_app(registry, settings.metrics_path)
    httpd = make_server(
        settings.listen_host,
        settings.listen_port,
        app,
        server_class=ThreadingWSGIServer,
        handler_class=_LoggingRequestHandler,
    )
    logger.info(
        "Serving swarm metrics on http://%s:%d%s",
        settings.listen_host,
        settings.listen_port,
        settings.metrics_path,
    )
    with httpd:
        httpd.serve_forever()
