"""Explicit field-path extraction for webhook bodies.

Each parser handler declares an ordered tuple of :class:`FieldRule` values
describing where its fields live in the payload. :func:`extract_fields`
walks the rules in order and either returns every value in canonical form or
raises the error matching the first missing required field. Nothing is read
from a payload except through a declared rule.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import enum
import typing as typ

from dorametrix.common.time import convert_date_to_epoch_ms

from .errors import MissingEventTimeError, MissingIdError

Body: typ.TypeAlias = cabc.Mapping[str, typ.Any]
Headers: typ.TypeAlias = cabc.Mapping[str, str]


class FieldKind(enum.StrEnum):
    """How an extracted value is normalized and which error it raises."""

    TIMESTAMP = "timestamp"
    IDENTIFIER = "identifier"
    TEXT = "text"


@dataclasses.dataclass(frozen=True, slots=True)
class FieldRule:
    """Location and treatment of one payload field.

    Attributes
    ----------
    name
        Key under which the value is returned.
    path
        Keys walked from the payload root.
    kind
        Normalization applied to the raw value.
    required
        Raise when the value is absent instead of returning ``None``.

    """

    name: str
    path: tuple[str, ...]
    kind: FieldKind
    required: bool = True

    @property
    def dotted(self) -> str:
        """Return the path joined with dots for messages."""
        return ".".join(self.path)


def timestamp(name: str, *path: str, required: bool = True) -> FieldRule:
    """Declare a timestamp field."""
    return FieldRule(name, path, FieldKind.TIMESTAMP, required=required)


def identifier(name: str, *path: str) -> FieldRule:
    """Declare a required identifier field."""
    return FieldRule(name, path, FieldKind.IDENTIFIER)


def text(name: str, *path: str) -> FieldRule:
    """Declare an optional free-text field."""
    return FieldRule(name, path, FieldKind.TEXT, required=False)


def resolve_path(body: object, path: cabc.Sequence[str]) -> object | None:
    """Return the value at ``path`` or ``None`` when any step is absent."""
    current = body
    for key in path:
        if not isinstance(current, cabc.Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def _is_blank(rule: FieldRule, value: object) -> bool:
    if value is None or value == "" or value is False:
        return True
    # A zero identifier is as good as none.
    return rule.kind is FieldKind.IDENTIFIER and value == 0


def _normalize(rule: FieldRule, value: object, handler: str) -> str:
    if rule.kind is FieldKind.TIMESTAMP:
        try:
            return convert_date_to_epoch_ms(value)
        except ValueError as exc:
            raise MissingEventTimeError.invalid(handler, rule.dotted, value) from exc
    return str(value)


def _missing(rule: FieldRule, handler: str) -> Exception:
    if rule.kind is FieldKind.IDENTIFIER:
        return MissingIdError.for_handler(handler, rule.dotted)
    return MissingEventTimeError.for_handler(handler, rule.dotted)


def extract_fields(
    body: Body,
    rules: cabc.Sequence[FieldRule],
    *,
    handler: str,
) -> dict[str, str | None]:
    """Resolve ``rules`` against ``body`` in declaration order.

    Parameters
    ----------
    body
        Decoded webhook payload.
    rules
        Ordered field declarations for one handler.
    handler
        Handler name reported in error messages.

    Returns
    -------
    dict[str, str | None]
        Canonical string values keyed by rule name; optional fields that are
        absent map to ``None``.

    Raises
    ------
    MissingEventTimeError
        If a required timestamp is absent or cannot be parsed.
    MissingIdError
        If a required identifier is absent.

    """
    values: dict[str, str | None] = {}
    for rule in rules:
        raw = resolve_path(body, rule.path)
        if _is_blank(rule, raw):
            if rule.required:
                raise _missing(rule, handler)
            values[rule.name] = None
            continue
        values[rule.name] = _normalize(rule, raw, handler)
    return values


def get_header(headers: Headers | None, name: str) -> str | None:
    """Return a header value, matching the name case-insensitively."""
    if not headers:
        return None
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def contains_marker(value: object, marker: str) -> bool:
    """Return True when a tag string or label list mentions ``marker``.

    Strings match on substring, as Azure tags arrive as ``"a; b"``; lists
    match on exact element.
    """
    if isinstance(value, str):
        return marker in value
    if isinstance(value, cabc.Sequence):
        return marker in value
    return False
