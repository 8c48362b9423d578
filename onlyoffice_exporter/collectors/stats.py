"""Typed model of the Document Server ``info.json`` statistics document."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..utils.errors import DecodeError


class _UpstreamModel(BaseModel):
    # Upstream keys are camelCase; unknown keys are ignored.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat null like an absent key so the field keeps its default."""
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ConnectionCounts(_UpstreamModel):
    """Minimum, average and maximum connections over one window."""
    min: int = Field(default=0, ge=0)
    avr: int = Field(default=0, ge=0)
    max: int = Field(default=0, ge=0)


class WindowStats(_UpstreamModel):
    edit: ConnectionCounts = Field(default_factory=ConnectionCounts)
    view: ConnectionCounts = Field(default_factory=ConnectionCounts)


class ConnectionsStat(_UpstreamModel):
    hour: WindowStats = Field(default_factory=WindowStats)
    day: WindowStats = Field(default_factory=WindowStats)
    week: WindowStats = Field(default_factory=WindowStats)
    month: WindowStats = Field(default_factory=WindowStats)


class LicenseInfo(_UpstreamModel):
    connections: int = Field(default=0, ge=0)
    has_license: bool = Field(default=False, alias="hasLicense")
    build_date: str = Field(default="", alias="buildDate")
    end_date: str = Field(default="", alias="endDate")


class ServerInfo(_UpstreamModel):
    build_version: str = Field(default="", alias="buildVersion")
    build_number: int = Field(default=0, ge=0, alias="buildNumber")


class OnlyofficeStats(_UpstreamModel):
    """One decoded scrape of the statistics endpoint."""

    connections_stat: ConnectionsStat = Field(default_factory=ConnectionsStat, alias="connectionsStat")
    license_info: LicenseInfo = Field(default_factory=LicenseInfo, alias="licenseInfo")
    server_info: ServerInfo = Field(default_factory=ServerInfo, alias="serverInfo")

    def counts(self, window: str, mode: str) -> ConnectionCounts:
        """Return the counts for e.g. ``("hour", "edit")``."""
        return getattr(getattr(self.connections_stat, window), mode)


def decode_stats(data: bytes) -> OnlyofficeStats:
    """
    Decode a raw response body into statistics.

    Missing or null fields fall back to zero or empty values; invalid JSON and
    values of the wrong shape are rejected.

    Raises:
        DecodeError: If the body is not valid statistics JSON
    """
    try:
        return OnlyofficeStats.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"not a valid json: {e}") from e
