"""Unit tests for field-path extraction."""

# ruff: noqa: D102

from __future__ import annotations

import pytest

from dorametrix.parsers.errors import MissingEventTimeError, MissingIdError
from dorametrix.parsers.fields import (
    contains_marker,
    extract_fields,
    get_header,
    identifier,
    resolve_path,
    text,
    timestamp,
)

_RULES = (
    timestamp("time_created", "item", "created"),
    identifier("id", "item", "id"),
    text("title", "item", "title"),
)


class TestResolvePath:
    """Tests for nested lookups."""

    def test_returns_nested_value(self) -> None:
        assert resolve_path({"a": {"b": {"c": 3}}}, ("a", "b", "c")) == 3

    def test_absent_step_yields_none(self) -> None:
        assert resolve_path({"a": {}}, ("a", "b", "c")) is None

    def test_non_mapping_step_yields_none(self) -> None:
        assert resolve_path({"a": "text"}, ("a", "b")) is None

    def test_dotted_keys_are_single_steps(self) -> None:
        body = {"fields": {"System.CreatedDate": "x"}}

        assert resolve_path(body, ("fields", "System.CreatedDate")) == "x"


class TestExtractFields:
    """Tests for rule-driven extraction."""

    def test_normalizes_every_field(self) -> None:
        body = {"item": {"created": "2023-11-14T22:13:20Z", "id": 7, "title": "t"}}

        values = extract_fields(body, _RULES, handler="handle_item")

        assert values == {"time_created": "1700000000000", "id": "7", "title": "t"}

    def test_optional_field_absent_maps_to_none(self) -> None:
        body = {"item": {"created": "1700000000", "id": "x"}}

        values = extract_fields(body, _RULES, handler="handle_item")

        assert values["title"] is None

    def test_missing_timestamp_names_handler_and_field(self) -> None:
        with pytest.raises(MissingEventTimeError) as excinfo:
            extract_fields({"item": {"id": 1}}, _RULES, handler="handle_item")

        assert excinfo.value.handler == "handle_item"
        assert excinfo.value.field == "item.created"
        assert "handle_item()" in str(excinfo.value)

    def test_blank_timestamp_counts_as_missing(self) -> None:
        with pytest.raises(MissingEventTimeError):
            extract_fields(
                {"item": {"created": "", "id": 1}}, _RULES, handler="handle_item"
            )

    def test_unparseable_timestamp_raises_missing_event_time(self) -> None:
        with pytest.raises(MissingEventTimeError, match="Unparseable"):
            extract_fields(
                {"item": {"created": "soon", "id": 1}}, _RULES, handler="handle_item"
            )

    def test_missing_identifier_names_handler(self) -> None:
        with pytest.raises(MissingIdError) as excinfo:
            extract_fields(
                {"item": {"created": "1700000000"}}, _RULES, handler="handle_item"
            )

        assert excinfo.value.handler == "handle_item"
        assert excinfo.value.field == "item.id"

    def test_rules_are_checked_in_declaration_order(self) -> None:
        """A payload missing both fields reports the first declared one."""
        with pytest.raises(MissingEventTimeError):
            extract_fields({"item": {}}, _RULES, handler="handle_item")


@pytest.mark.parametrize(
    "headers",
    [
        {"X-GitHub-Event": "issues"},
        {"x-github-event": "issues"},
        {"X-GITHUB-EVENT": "issues"},
    ],
)
def test_get_header_is_case_insensitive(headers: dict[str, str]) -> None:
    assert get_header(headers, "X-GitHub-Event") == "issues"


def test_get_header_handles_missing_headers() -> None:
    assert get_header(None, "X-GitHub-Event") is None
    assert get_header({}, "X-GitHub-Event") is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("incident; portal", True),
        ("portal", False),
        (["incident", "portal"], True),
        (["incidental"], False),
        (None, False),
        ({"newValue": "incident"}, False),
    ],
)
def test_contains_marker(value: object, *, expected: bool) -> None:
    assert contains_marker(value, "incident") is expected


@pytest.mark.parametrize("raw_id", [0, False, ""])
def test_zero_or_blank_identifier_is_missing(raw_id: object) -> None:
    """Falsy identifiers raise instead of becoming ``"0"``."""
    body = {"item": {"created": "1700000000", "id": raw_id}}

    with pytest.raises(MissingIdError):
        extract_fields(body, _RULES, handler="handle_item")


def test_zero_string_identifier_is_kept() -> None:
    """Only the integer zero is treated as absent."""
    body = {"item": {"created": "1700000000", "id": "0"}}

    assert extract_fields(body, _RULES, handler="handle_item")["id"] == "0"
