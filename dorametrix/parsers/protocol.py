"""Parser protocol and the vocabularies parsers map into."""

from __future__ import annotations

import enum
import typing as typ

if typ.TYPE_CHECKING:
    from dorametrix.events import EventDto

    from .fields import Body, Headers


class EventType(enum.StrEnum):
    """Canonical record families."""

    CHANGE = "change"
    DEPLOYMENT = "deployment"
    INCIDENT = "incident"


class CanonicalAction(enum.StrEnum):
    """Provider-independent actions a handler is chosen by."""

    OPENED = "opened"
    LABELED = "labeled"
    CLOSED = "closed"
    UNLABELED = "unlabeled"
    DELETED = "deleted"
    UNRECOGNIZED = "unrecognized"


@typ.runtime_checkable
class Parser(typ.Protocol):
    """Capability set every provider parser implements.

    Implementations are stateless apart from configuration, so one instance
    may serve concurrent webhook deliveries.

    Examples
    --------
    >>> from dorametrix.parsers import GitHubParser, Parser
    >>> isinstance(GitHubParser(), Parser)
    True

    """

    provider: str

    def classify_event_type(
        self, headers: Headers | None, body: Body | None = None
    ) -> EventType:
        """Return the record family a webhook belongs to.

        ``body`` is consulted only by providers that can classify a
        delivery without headers.

        Raises
        ------
        MissingEventError
            If the webhook carries no event signal.
        UnknownEventTypeError
            If the declared event type has no mapping.

        """
        ...

    def build_payload(self, headers: Headers | None, body: Body | None) -> EventDto:
        """Normalize a webhook body into an ``EventDto``.

        Unrecognized actions yield ``EventDto.unknown()`` instead of raising.

        Raises
        ------
        MissingEventError
            If no event can be determined.
        MissingEventTimeError
            If the chosen handler's timestamp is absent.
        MissingIdError
            If the chosen handler's identifier is absent.

        """
        ...

    def resolve_repository_name(self, body: Body | None) -> str:
        """Return the repository or workspace the webhook belongs to."""
        ...
