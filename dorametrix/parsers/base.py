"""Behaviour shared by the provider parsers."""

from __future__ import annotations

import dataclasses
import typing as typ

from dorametrix.common.time import now_ms, to_milliseconds
from dorametrix.config import DorametrixConfig
from dorametrix.events import EventDto, encode_payload
from dorametrix.observability import IngestionEventLogger

from .fields import extract_fields

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .fields import Body, FieldRule
    from .protocol import CanonicalAction

Clock: typ.TypeAlias = "cabc.Callable[[], str]"


@dataclasses.dataclass(frozen=True, slots=True)
class Handler:
    """Extraction rules bound to the name reported when they fail."""

    name: str
    rules: tuple[FieldRule, ...]


class ParserBase:
    """Build ``EventDto`` values from per-action handler tables.

    Subclasses resolve a :class:`CanonicalAction` and look it up in their
    handler table; actions without a handler produce the sentinel record.
    """

    provider: typ.ClassVar[str]

    def __init__(
        self,
        config: DorametrixConfig | None = None,
        *,
        clock: Clock = now_ms,
        event_logger: IngestionEventLogger | None = None,
    ) -> None:
        """Create a parser with optional configuration and collaborators."""
        self._config = config or DorametrixConfig()
        self._clock = clock
        self._event_logger = event_logger or IngestionEventLogger()

    def _dispatch(
        self,
        body: Body,
        action: CanonicalAction,
        handlers: cabc.Mapping[CanonicalAction, Handler],
    ) -> EventDto:
        handler = handlers.get(action)
        if handler is None:
            return EventDto.unknown()
        values = extract_fields(body, handler.rules, handler=handler.name)
        return self._event(body, values)

    def _event(self, body: Body, values: dict[str, str | None]) -> EventDto:
        time_created = typ.cast("str", values["time_created"])
        event_id = typ.cast("str", values["id"])
        time_resolved = values.get("time_resolved")
        if time_resolved is not None and to_milliseconds(
            time_created
        ) > to_milliseconds(time_resolved):
            self._event_logger.log_inconsistent_event(
                provider=self.provider,
                event_id=event_id,
                time_created=time_created,
                time_resolved=time_resolved,
            )
        return EventDto(
            event_time=self._clock(),
            time_created=time_created,
            time_resolved=time_resolved,
            id=event_id,
            title=values.get("title"),
            message=encode_payload(body),
        )
