"""Shared pytest configuration and fixtures."""

import json

import pytest
from unittest.mock import Mock

from onlyoffice_exporter.collectors.onlyoffice_collector import OnlyofficeCollector
from onlyoffice_exporter.config.models import ExporterConfig
from onlyoffice_exporter.services.stats_client import StatsClient, StatsResponse
from onlyoffice_exporter.utils.logger import setup_logger


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test")


@pytest.fixture
def config():
    """Default exporter configuration."""
    return ExporterConfig()


@pytest.fixture
def stats_payload():
    """Statistics document as served by a Document Server."""
    return {
        "connectionsStat": {
            "hour": {"edit": {"min": 1, "avr": 2, "max": 3}, "view": {"min": 4, "avr": 5, "max": 6}},
            "day": {"edit": {"min": 7, "avr": 8, "max": 9}, "view": {"min": 10, "avr": 11, "max": 12}},
            "week": {"edit": {"min": 13, "avr": 14, "max": 15}, "view": {"min": 16, "avr": 17, "max": 18}},
            "month": {"edit": {"min": 19, "avr": 20, "max": 21}, "view": {"min": 22, "avr": 23, "max": 24}},
        },
        "licenseInfo": {
            "connections": 20,
            "hasLicense": True,
            "buildDate": "2023-06-06T12:00:00.000Z",
            "endDate": "2024-06-06T00:00:00.000Z",
        },
        "serverInfo": {"buildVersion": "7.4.0", "buildNumber": 163},
    }


@pytest.fixture
def ok_response(stats_payload):
    return StatsResponse(status_code=200, reason="OK", body=json.dumps(stats_payload).encode())


@pytest.fixture
def mock_client():
    """StatsClient double; set fetch.return_value or fetch.side_effect per test."""
    return Mock(spec=StatsClient)


@pytest.fixture
def collector(config, logger, mock_client):
    return OnlyofficeCollector(config, logger, client=mock_client)


@pytest.fixture
def samples():
    """Flatten metric families into (name, labels, value) tuples."""
    def _samples(families):
        return [
            (sample.name, sample.labels, sample.value)
            for family in families
            for sample in family.samples
        ]
    return _samples
