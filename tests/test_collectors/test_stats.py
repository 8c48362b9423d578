"""Tests for decoding the statistics document."""

import json

import pytest

from onlyoffice_exporter.collectors.stats import OnlyofficeStats, decode_stats
from onlyoffice_exporter.utils.errors import DecodeError


def test_decode_full_payload(stats_payload):
    stats = decode_stats(json.dumps(stats_payload).encode())

    assert stats.connections_stat.hour.edit.avr == 2
    assert stats.connections_stat.month.view.max == 24
    assert stats.license_info.connections == 20
    assert stats.license_info.has_license is True
    assert stats.license_info.end_date == "2024-06-06T00:00:00.000Z"
    assert stats.server_info.build_version == "7.4.0"
    assert stats.server_info.build_number == 163


def test_counts_lookup(stats_payload):
    stats = decode_stats(json.dumps(stats_payload).encode())

    assert stats.counts("day", "view").min == 10
    assert stats.counts("week", "edit").max == 15


def test_missing_fields_default_to_zero():
    stats = decode_stats(b'{"connectionsStat": {"hour": {"edit": {"max": 5}}}}')

    assert stats.connections_stat.hour.edit.min == 0
    assert stats.connections_stat.hour.edit.max == 5
    assert stats.connections_stat.day.view.avr == 0
    assert stats.license_info.has_license is False
    assert stats.license_info.build_date == ""
    assert stats.server_info.build_version == ""
    assert stats.server_info.build_number == 0


def test_empty_object():
    assert decode_stats(b"{}") == OnlyofficeStats()


def test_null_fields_use_defaults():
    """Test that a community edition document without license dates decodes."""
    stats = decode_stats(
        b'{"connectionsStat": {"hour": {"edit": {"min": null, "avr": 3}, "view": null}, "day": null},'
        b' "licenseInfo": {"connections": 20, "hasLicense": null, "buildDate": "2023-06-06", "endDate": null},'
        b' "serverInfo": null}'
    )

    assert stats.connections_stat.hour.edit.min == 0
    assert stats.connections_stat.hour.edit.avr == 3
    assert stats.connections_stat.hour.view.max == 0
    assert stats.connections_stat.day.edit.avr == 0
    assert stats.license_info.connections == 20
    assert stats.license_info.has_license is False
    assert stats.license_info.end_date == ""
    assert stats.server_info.build_version == ""
    assert stats.server_info.build_number == 0


def test_null_document_decodes_to_zeros():
    assert decode_stats(b"null") == OnlyofficeStats()


def test_unknown_fields_ignored():
    stats = decode_stats(b'{"licenseInfo": {"connections": 5, "mode": 0}, "quota": {}}')

    assert stats.license_info.connections == 5


@pytest.mark.parametrize("body", [
    b"not json",
    b"",
    b"[1, 2, 3]",
    b'{"connectionsStat": {"hour": {"edit": {"min": "many"}}}}',
    b'{"connectionsStat": {"hour": {"edit": {"min": -1}}}}',
    b'{"serverInfo": "7.4.0"}',
])
def test_invalid_body_raises_decode_error(body):
    with pytest.raises(DecodeError, match="not a valid json"):
        decode_stats(body)
