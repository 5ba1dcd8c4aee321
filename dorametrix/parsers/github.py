"""Parser for GitHub repository webhooks.

Merged pull requests become changes. Issues carrying the configured incident
label become incidents: opening or labelling one opens the incident, and
closing or unlabelling it resolves the incident.

The ``X-GitHub-Event`` header selects the event family. A delivery without
the header is still treated as a pull request when its ``action`` is
``closed``, by both classification and normalization; anything else
without the header raises ``MissingEventError``.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from dorametrix.events import EventDto

from .base import Handler, ParserBase
from .errors import MissingEventError, UnknownEventTypeError
from .fields import get_header, identifier, resolve_path, text, timestamp
from .protocol import CanonicalAction, EventType

if typ.TYPE_CHECKING:
    from .fields import Body, Headers

_EVENT_HEADER = "X-GitHub-Event"
_PULL_REQUEST = "pull_request"
_ISSUES = "issues"

_EVENT_TYPES: dict[str, EventType] = {
    _PULL_REQUEST: EventType.CHANGE,
    _ISSUES: EventType.INCIDENT,
}

_PULL_REQUEST_HANDLERS: dict[CanonicalAction, Handler] = {
    CanonicalAction.CLOSED: Handler(
        "handle_pull_request",
        (
            timestamp("time_created", "pull_request", "merged_at"),
            identifier("id", "pull_request", "merge_commit_sha"),
            text("title", "pull_request", "title"),
        ),
    ),
}

_ISSUE_OPENED = Handler(
    "handle_opened_labeled",
    (
        timestamp("time_created", "issue", "created_at"),
        identifier("id", "issue", "id"),
        text("title", "issue", "title"),
    ),
)

_ISSUE_HANDLERS: dict[CanonicalAction, Handler] = {
    CanonicalAction.OPENED: _ISSUE_OPENED,
    CanonicalAction.LABELED: _ISSUE_OPENED,
    # closed_at is only populated once the issue is closed; an unlabel
    # resolves the incident at the time of the edit.
    CanonicalAction.CLOSED: Handler(
        "handle_closed",
        (
            timestamp("time_created", "issue", "created_at"),
            timestamp("time_resolved", "issue", "closed_at"),
            identifier("id", "issue", "id"),
            text("title", "issue", "title"),
        ),
    ),
    CanonicalAction.UNLABELED: Handler(
        "handle_unlabeled",
        (
            timestamp("time_created", "issue", "created_at"),
            timestamp("time_resolved", "issue", "updated_at"),
            identifier("id", "issue", "id"),
            text("title", "issue", "title"),
        ),
    ),
}


def _label_names(labels: object) -> list[str]:
    if not isinstance(labels, cabc.Sequence) or isinstance(labels, str):
        return []
    return [
        label["name"]
        for label in labels
        if isinstance(label, cabc.Mapping) and isinstance(label.get("name"), str)
    ]


class GitHubParser(ParserBase):
    """Normalize GitHub ``pull_request`` and ``issues`` webhooks."""

    provider: typ.ClassVar[str] = "github"

    def classify_event_type(
        self, headers: Headers | None, body: Body | None = None
    ) -> EventType:
        """Map the ``X-GitHub-Event`` header to a record family.

        Without the header, a ``closed`` delivery is classified as a change.
        """
        event = self._resolve_family(headers, body or {})
        try:
            return _EVENT_TYPES[event]
        except KeyError:
            raise UnknownEventTypeError(self.provider, event) from None

    def build_payload(self, headers: Headers | None, body: Body | None) -> EventDto:
        """Normalize a pull request or issue webhook."""
        body = body or {}
        family = self._resolve_family(headers, body)
        if family == _PULL_REQUEST:
            action = self._pull_request_action(body)
            return self._dispatch(body, action, _PULL_REQUEST_HANDLERS)
        if family == _ISSUES:
            action = self._issue_action(body)
            return self._dispatch(body, action, _ISSUE_HANDLERS)
        return EventDto.unknown()

    def resolve_repository_name(self, body: Body | None) -> str:
        """Return ``repository.full_name`` or an empty string."""
        name = resolve_path(body or {}, ("repository", "full_name"))
        return name if isinstance(name, str) else ""

    def _resolve_family(self, headers: Headers | None, body: Body) -> str:
        event = get_header(headers, _EVENT_HEADER)
        if event:
            return event
        if body.get("action") == "closed":
            return _PULL_REQUEST
        raise MissingEventError(self.provider)

    @staticmethod
    def _pull_request_action(body: Body) -> CanonicalAction:
        # Only merged pull requests count as changes, whatever the action.
        if resolve_path(body, (_PULL_REQUEST, "merged")) is True:
            return CanonicalAction.CLOSED
        return CanonicalAction.UNRECOGNIZED

    def _issue_action(self, body: Body) -> CanonicalAction:
        incident_label = self._config.incident_label
        action = body.get("action")
        is_incident = incident_label in _label_names(
            resolve_path(body, ("issue", "labels"))
        )
        changed_label = resolve_path(body, ("label", "name"))

        if action == "opened" and is_incident:
            return CanonicalAction.OPENED
        if action == "labeled" and changed_label == incident_label:
            return CanonicalAction.LABELED
        if action == "closed" and is_incident:
            return CanonicalAction.CLOSED
        if action == "unlabeled" and changed_label == incident_label:
            return CanonicalAction.UNLABELED
        return CanonicalAction.UNRECOGNIZED
