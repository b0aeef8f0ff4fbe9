import json
from datetime import datetime

import pytest

from mrologix.assistant.errors import MissingRequiredArgument, UnknownFunction
from mrologix.assistant.sanitize import parse_arguments, parse_date, sanitize_arguments


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('{"limit": 500}', 20),
        ('{"limit": -3}', 1),
        ('{"limit": 0}', 1),
        ('{"limit": 7.9}', 7),
        ('{"limit": -0.5}', 1),
        ('{"limit": "10"}', 5),
        ('{"limit": true}', 5),
        ('{"limit": null}', 5),
        ('{"limit": NaN}', 5),
        ('{"limit": Infinity}', 5),
        ("{}", 5),
    ],
)
def test_limit_is_clamped_or_defaulted(raw, expected):
    assert sanitize_arguments("list_recent_flight_records", raw) == {"limit": expected}


@pytest.mark.parametrize("raw", ["", "   ", "not json", "{", "[]", "42", '"text"', None, b"\xff\xfe"])
def test_malformed_arguments_fall_back_to_defaults(raw):
    assert sanitize_arguments("list_recent_flight_records", raw) == {"limit": 5}


def test_parse_arguments_accepts_mappings_and_bytes():
    assert parse_arguments({"a": 1}) == {"a": 1}
    assert parse_arguments(b'{"a": 1}') == {"a": 1}
    assert parse_arguments(3.5) == {}


def test_missing_required_argument_raises():
    with pytest.raises(MissingRequiredArgument) as excinfo:
        sanitize_arguments("get_flight_record_by_id", "{}")
    assert excinfo.value.argument == "id"
    assert excinfo.value.function == "get_flight_record_by_id"
    assert excinfo.value.code == "missing_required_argument"


@pytest.mark.parametrize("value", ["", "   ", 12, None, ["fr-1"]])
def test_invalid_required_argument_counts_as_missing(value):
    with pytest.raises(MissingRequiredArgument):
        sanitize_arguments("get_flight_record_by_id", json.dumps({"id": value}))


def test_required_argument_is_trimmed():
    assert sanitize_arguments("get_flight_record_by_id", '{"id": "  fr-1 "}') == {"id": "fr-1"}


def test_unknown_function_raises():
    with pytest.raises(UnknownFunction):
        sanitize_arguments("delete_everything", "{}")


def test_undeclared_keys_are_dropped():
    args = sanitize_arguments(
        "search_flight_records_by_tail",
        '{"tail": "N123AB", "limit": 3, "sql": "DROP TABLE flight_record"}',
    )
    assert args == {"tail": "N123AB", "limit": 3}


def test_booleans_must_be_real_booleans():
    args = sanitize_arguments("search_flight_records", '{"hasDefect": "true", "hasTime": false}')
    assert args == {"hasTime": False, "limit": 20}


def test_long_strings_are_truncated():
    args = sanitize_arguments("search_flight_records", json.dumps({"discrepancyNote": "x" * 2000}))
    assert len(args["discrepancyNote"]) == 512


def test_date_arguments_are_parsed_or_dropped():
    args = sanitize_arguments(
        "search_flight_records",
        json.dumps({"dateFrom": "2024-05-01", "dateTo": "yesterday", "createdTo": "2024-05-03T10:00:00+02:00"}),
    )
    assert args["dateFrom"] == datetime(2024, 5, 1)
    assert "dateTo" not in args
    assert args["createdTo"] == datetime(2024, 5, 3, 8, 0)


def test_parse_date_handles_zulu_suffix():
    assert parse_date("2024-05-01T12:00:00Z") == datetime(2024, 5, 1, 12, 0)
    assert parse_date("") is None
    assert parse_date(20240501) is None


def test_array_arguments_keep_unique_strings():
    args = sanitize_arguments(
        "get_dashboard_statistics",
        json.dumps({"modules": ["flight_records", 5, " ", "flight_records", "sdr_reports"]}),
    )
    assert args == {"modules": ["flight_records", "sdr_reports"]}


def test_empty_required_array_is_missing():
    with pytest.raises(MissingRequiredArgument):
        sanitize_arguments("get_dashboard_statistics", '{"modules": []}')
    with pytest.raises(MissingRequiredArgument):
        sanitize_arguments("get_dashboard_statistics", '{"modules": "flight_records"}')


def test_sanitize_is_deterministic():
    raw = '{"tail": "N1", "limit": 99}'
    assert sanitize_arguments("search_flight_records_by_tail", raw) == sanitize_arguments(
        "search_flight_records_by_tail", raw
    )


def test_deeply_nested_arguments_fall_back_to_defaults():
    nested = '{"limit": ' + "[" * 200_000 + "]" * 200_000 + "}"
    assert parse_arguments("[" * 200_000 + "]" * 200_000) == {}
    assert sanitize_arguments("list_recent_flight_records", nested) == {"limit": 5}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('{"tempMin": 18}', {"tempMin": 18.0}),
        ('{"tempMin": -4.5}', {"tempMin": -4.5}),
        ('{"tempMin": "18"}', {}),
        ('{"tempMin": true}', {}),
        ('{"tempMin": NaN}', {}),
        ('{"tempMin": -Infinity}', {}),
        ('{"tempMin": 1' + "0" * 400 + "}", {}),
    ],
)
def test_number_arguments_accept_finite_numbers_only(raw, expected):
    args = sanitize_arguments("search_temperature_control", raw)
    args.pop("limit")
    assert args == expected


def test_expiry_window_is_clamped():
    assert sanitize_arguments("search_airport_id", '{"expiringWithinDays": 0}')["expiringWithinDays"] == 1
    assert sanitize_arguments("search_airport_id", '{"expiringWithinDays": 99999}')["expiringWithinDays"] == 3650
    assert "expiringWithinDays" not in sanitize_arguments("search_airport_id", "{}")
