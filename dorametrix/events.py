"""Canonical event records shared by parsers and the metrics engine.

Parsers produce :class:`EventDto` values; callers persist them and later
rebuild :class:`Change`, :class:`Deployment` and :class:`Incident` records
for metric computation. All records are frozen msgspec structs that encode
to JSON with camelCase keys.

Examples
--------
>>> event = EventDto(
...     event_time="1700000000500",
...     time_created="1700000000000",
...     id="42",
...     message="{}",
... )
>>> decode_event(encode_event(event)) == event
True

"""

from __future__ import annotations

import typing as typ

import msgspec

UNKNOWN_MARKER = "UNKNOWN"


class EventDto(
    msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True, rename="camel"
):
    """A webhook normalized into provider-independent form.

    Attributes
    ----------
    event_time
        Epoch milliseconds at which the webhook was normalized.
    time_created
        Epoch milliseconds at which the change merged or the incident opened.
    id
        Provider-native identifier.
    message
        The original payload encoded as JSON, or ``UNKNOWN_MARKER``.
    time_resolved
        Epoch milliseconds at which the incident closed. ``None`` when not
        applicable or still open.
    title
        Human-readable title when the provider supplies one.
    recognized
        ``False`` only for the sentinel built by :meth:`unknown`.

    """

    event_time: str
    time_created: str
    id: str
    message: str
    time_resolved: str | None = None
    title: str | None = None
    recognized: bool = True

    @classmethod
    def unknown(cls) -> EventDto:
        """Return the sentinel record for webhooks no handler recognizes."""
        return cls(
            event_time=UNKNOWN_MARKER,
            time_created=UNKNOWN_MARKER,
            id=UNKNOWN_MARKER,
            message=UNKNOWN_MARKER,
            recognized=False,
        )

    @property
    def is_unknown(self) -> bool:
        """Return True for the sentinel record."""
        return not self.recognized


class Change(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """A merged code change."""

    id: str
    time_created: str

    @classmethod
    def from_event(cls, event: EventDto) -> Change:
        """Build a change from a normalized pull request event."""
        _require_recognized(event)
        return cls(id=event.id, time_created=event.time_created)


class DeploymentChange(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """A change bundled into a deployment."""

    id: str
    time_created: str


class Deployment(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """A production deployment and the changes it shipped."""

    id: str
    time_created: str
    changes: tuple[DeploymentChange, ...] = ()


class Incident(
    msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True, rename="camel"
):
    """A production incident; ``time_resolved`` is ``None`` while open."""

    id: str
    time_created: str
    time_resolved: str | None = None
    title: str | None = None

    @classmethod
    def from_event(cls, event: EventDto) -> Incident:
        """Build an incident from a normalized issue or work item event."""
        _require_recognized(event)
        return cls(
            id=event.id,
            time_created=event.time_created,
            time_resolved=event.time_resolved,
            title=event.title,
        )


class DeploymentResponse(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Result of the last deployment lookup."""

    id: str
    time_created: str


def _require_recognized(event: EventDto) -> None:
    if event.is_unknown:
        msg = "cannot build a metric record from an unrecognized event"
        raise ValueError(msg)


def recognized_events(events: typ.Iterable[EventDto]) -> list[EventDto]:
    """Drop sentinel records, preserving order."""
    return [event for event in events if not event.is_unknown]


def encode_payload(body: typ.Mapping[str, typ.Any]) -> str:
    """Encode an original webhook body for ``EventDto.message``."""
    return msgspec.json.encode(body).decode()


def encode_event(event: EventDto) -> str:
    """Encode an event as JSON text with camelCase keys."""
    return msgspec.json.encode(event).decode()


def decode_event(data: str | bytes) -> EventDto:
    """Decode JSON produced by :func:`encode_event`.

    Raises
    ------
    msgspec.ValidationError
        If the document does not describe an ``EventDto``.

    """
    return msgspec.json.decode(data, type=EventDto)


__all__ = [
    "UNKNOWN_MARKER",
    "Change",
    "Deployment",
    "DeploymentChange",
    "DeploymentResponse",
    "EventDto",
    "Incident",
    "decode_event",
    "encode_event",
    "encode_payload",
    "recognized_events",
]
