"""Pydantic configuration models for the exporter."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Tuple

DEFAULT_LISTEN_ADDRESS = ":9876"
DEFAULT_TELEMETRY_PATH = "/metrics"
DEFAULT_SCRAPE_URI = "http://localhost/info/info.json"
DEFAULT_TIMEOUT_SECONDS = 10.0


def split_listen_address(address: str) -> Tuple[str, int]:
    """
    Split a ``host:port`` listen address.

    An empty host (``":9876"``) means all interfaces and port 0 picks a free
    port. IPv6 hosts may be written in brackets (``"[::1]:9876"``).

    Args:
        address: Listen address string

    Returns:
        Tuple[str, int]: Host and port

    Raises:
        ValueError: If the address has no valid port
    """
    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"Listen address must be host:port, got {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not port.isdigit() or not 0 <= int(port) < 65536:
        raise ValueError(f"Invalid port in listen address {address!r}")
    return host, int(port)


class ExporterConfig(BaseModel):
    """Scrape target and exposition settings, fixed for the process lifetime."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    scrape_uri: str = DEFAULT_SCRAPE_URI
    insecure: bool = False  # Skip TLS certificate verification for https targets
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    telemetry_path: str = DEFAULT_TELEMETRY_PATH
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    log_level: str = "INFO"

    @field_validator('scrape_uri')
    @classmethod
    def validate_scrape_uri(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v

    @field_validator('telemetry_path')
    @classmethod
    def validate_telemetry_path(cls, v: str) -> str:
        if not v.startswith('/') or v == '/':
            raise ValueError('Telemetry path must start with / and cannot be the root path')
        return v

    @field_validator('listen_address')
    @classmethod
    def validate_listen_address(cls, v: str) -> str:
        split_listen_address(v)
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f'Unknown log level: {v}')
        return level

    @property
    def listen_host(self) -> str:
        return split_listen_address(self.listen_address)[0]

    @property
    def listen_port(self) -> int:
        return split_listen_address(self.listen_address)[1]
