"""Tests for ConfigLoader."""

import pytest
from pydantic import ValidationError

from onlyoffice_exporter.config.loader import ConfigLoader


def test_load_from_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        'scrape_uri: "https://docs.example.com/info/info.json"\n'
        'insecure: true\n'
        'listen_address: "127.0.0.1:9100"\n'
    )

    config = ConfigLoader.load_from_file(str(path))

    assert config.scrape_uri == "https://docs.example.com/info/info.json"
    assert config.insecure is True
    assert config.listen_port == 9100
    assert config.telemetry_path == "/metrics"


def test_env_substitution(tmp_path, monkeypatch):
    monkeypatch.setenv("ONLYOFFICE_HOST", "docs.internal")
    path = tmp_path / "config.yaml"
    path.write_text('scrape_uri: "https://${ONLYOFFICE_HOST}/info/info.json"\n')

    config = ConfigLoader.load_from_file(str(path))

    assert config.scrape_uri == "https://docs.internal/info/info.json"


def test_overrides_take_precedence(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text('telemetry_path: "/stats"\ninsecure: true\n')

    config = ConfigLoader.load_from_file(
        str(path),
        {"telemetry_path": "/custom", "insecure": None},
    )

    assert config.telemetry_path == "/custom"
    assert config.insecure is True


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")

    config = ConfigLoader.load_from_file(str(path))

    assert config.listen_address == ":9876"


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        ConfigLoader.load_from_file("/nonexistent/config.yaml")


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError):
        ConfigLoader.load_from_file(str(path))


def test_invalid_value_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text('scrape_uri: "localhost/info/info.json"\n')

    with pytest.raises(ValidationError):
        ConfigLoader.load_from_file(str(path))


def test_build_without_file():
    config = ConfigLoader.build(overrides={"scrape_uri": None, "timeout_seconds": 2.5})

    assert config.scrape_uri == "http://localhost/info/info.json"
    assert config.timeout_seconds == 2.5
