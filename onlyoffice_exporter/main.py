"""Main application entry point for the OnlyOffice Prometheus exporter."""

import argparse
import os
import signal
import sys
from typing import List, Optional

import yaml

from prometheus_client import CollectorRegistry, GCCollector, PlatformCollector, ProcessCollector
from pydantic import ValidationError

from .collectors.onlyoffice_collector import OnlyofficeCollector
from .config.loader import ConfigLoader
from .config.models import (
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_SCRAPE_URI,
    DEFAULT_TELEMETRY_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    ExporterConfig,
)
from .server import MetricsServer
from .utils.logger import setup_logger
from .utils.version import build_context, version_info, __version__


class ExporterApp:
    """
    Exporter application.

    Owns the registry, the collector and the metrics server. Scrapes happen
    only when the telemetry path is requested.
    """

    def __init__(self, config: ExporterConfig):
        """
        Initialize exporter application.

        Args:
            config: Validated exporter configuration
        """
        self.config = config
        self.logger = setup_logger("onlyoffice_exporter", config.log_level)

        self.registry = CollectorRegistry()
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.collector = OnlyofficeCollector(config, self.logger)
        self.registry.register(self.collector)

        self.server = MetricsServer(config, self.registry)

    def _signal_handler(self, signum, frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received {signal_name}, shutting down")
        sys.exit(0)

    def run(self) -> None:
        """
        Bind the listener and serve until interrupted.

        Exits with status 1 if the listen address cannot be bound.
        """
        self.logger.info(f"Starting onlyoffice-exporter {version_info()}")
        self.logger.info(f"Build context {build_context()}")
        self.logger.info(f"Starting Server: {self.config.listen_address}")
        self.logger.info(f"Collect from: {self.config.scrape_uri}")

        try:
            self.server.bind()
        except OSError as e:
            self.logger.critical(f"Cannot listen on {self.config.listen_address}: {e}")
            self.collector.close()
            sys.exit(1)

        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

        try:
            self.server.serve_forever()
        finally:
            self.server.close()
            self.collector.close()
            self.logger.info("Exporter stopped")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='onlyoffice-exporter',
        description='Prometheus exporter for ONLYOFFICE Document Server statistics',
    )

    # Defaults stay None so a config file value is not overridden by an unset flag
    parser.add_argument(
        '--listen-address', '--web.listen-address',
        dest='listen_address',
        default=None,
        help=f'Address on which to expose metrics (default: {DEFAULT_LISTEN_ADDRESS})'
    )
    parser.add_argument(
        '--telemetry-path', '--web.telemetry-path',
        dest='telemetry_path',
        default=None,
        help=f'Path under which to expose metrics (default: {DEFAULT_TELEMETRY_PATH})'
    )
    parser.add_argument(
        '--scrape-uri', '--scrape_uri',
        dest='scrape_uri',
        default=None,
        help=f'URI to the onlyoffice statistics info (default: {DEFAULT_SCRAPE_URI})'
    )
    parser.add_argument(
        '--insecure',
        action='store_true',
        default=None,
        help='Ignore onlyoffice server certificate if using https'
    )
    parser.add_argument(
        '--timeout',
        dest='timeout_seconds',
        type=float,
        default=None,
        help=f'Scrape request timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS:g})'
    )
    parser.add_argument(
        '--log-level',
        default=os.getenv('LOG_LEVEL') or None,
        type=str.upper,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO or LOG_LEVEL env var)'
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Optional YAML configuration file; command-line flags take precedence'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def load_config(args: argparse.Namespace) -> ExporterConfig:
    """
    Build the exporter configuration from parsed arguments.

    Raises:
        FileNotFoundError: If --config names a missing file
        pydantic.ValidationError: If a value is invalid
    """
    overrides = {
        'listen_address': args.listen_address,
        'telemetry_path': args.telemetry_path,
        'scrape_uri': args.scrape_uri,
        'insecure': args.insecure,
        'timeout_seconds': args.timeout_seconds,
        'log_level': args.log_level,
    }
    if args.config:
        return ConfigLoader.load_from_file(args.config, overrides)
    return ConfigLoader.build(overrides=overrides)


def main(argv: Optional[List[str]] = None):
    """
    CLI entry point.

    Parses command-line arguments and serves metrics until killed.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except (FileNotFoundError, ValueError, ValidationError, yaml.YAMLError) as e:
        setup_logger("onlyoffice_exporter").error(f"Invalid configuration: {e}")
        sys.exit(1)

    ExporterApp(config).run()


if __name__ == '__main__':
    main()
