"""HTTP exposition of the collector registry."""

import logging
import socket
from typing import Optional
from wsgiref.simple_server import WSGIRequestHandler, make_server

from prometheus_client import CollectorRegistry, make_wsgi_app
from prometheus_client.exposition import ThreadingWSGIServer

from .config.models import ExporterConfig

logger = logging.getLogger("onlyoffice_exporter.server")

LANDING_PAGE = """<html>
<head><title>OnlyOffice Exporter</title></head>
<body>
<h1>OnlyOffice Exporter</h1>
<p><a href="{path}">Metrics</a></p>
</body>
</html>
"""


class _LoggingRequestHandler(WSGIRequestHandler):
    """Send access logs through logging instead of stderr."""

    def log_message(self, format, *args):
        logger.debug(f"{self.address_string()} - {format % args}")


def make_exporter_app(registry: CollectorRegistry, telemetry_path: str):
    """
    Build the WSGI application serving the exporter.

    Args:
        registry: Registry holding the exporter collectors
        telemetry_path: Path answering with the text exposition format

    Returns:
        WSGI callable: metrics on ``telemetry_path``, a landing page on ``/``,
        404 elsewhere
    """
    metrics_app = make_wsgi_app(registry)
    landing_page = LANDING_PAGE.format(path=telemetry_path).encode("utf-8")

    def app(environ, start_response):
        path = environ.get("PATH_INFO") or "/"
        if path == telemetry_path:
            return metrics_app(environ, start_response)
        if path == "/":
            start_response("200 OK", [("Content-Type", "text/html; charset=utf-8")])
            return [landing_page]
        start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
        return [b"404 page not found\n"]

    return app


class _ThreadingWSGIServerV6(ThreadingWSGIServer):
    address_family = socket.AF_INET6


class MetricsServer:
    """Threaded HTTP server; each scrape of the telemetry path runs on its own thread."""

    def __init__(self, config: ExporterConfig, registry: CollectorRegistry):
        self.config = config
        self.registry = registry
        self.httpd: Optional[ThreadingWSGIServer] = None

    def bind(self) -> None:
        """
        Bind the listening socket.

        Raises:
            OSError: If the listen address cannot be bound
        """
        app = make_exporter_app(self.registry, self.config.telemetry_path)
        host = self.config.listen_host
        self.httpd = make_server(
            host,
            self.config.listen_port,
            app,
            server_class=_ThreadingWSGIServerV6 if ":" in host else ThreadingWSGIServer,
            handler_class=_LoggingRequestHandler,
        )

    def serve_forever(self) -> None:
        if self.httpd is None:
            self.bind()
        self.httpd.serve_forever()

    def close(self) -> None:
        if self.httpd is not None:
            self.httpd.server_close()
            self.httpd = None
