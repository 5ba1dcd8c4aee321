"""Parser for Azure DevOps work item webhooks.

Azure DevOps only reports incidents. A work item counts as an incident while
its ``System.Tags`` contain the configured incident tag. Field locations
differ by event: ``workitem.created`` puts the work item fields directly on
``resource``, while ``workitem.updated`` carries the field diff on
``resource.fields`` and the full work item on ``resource.revision``.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .base import Handler, ParserBase
from .errors import MissingEventError
from .fields import contains_marker, identifier, resolve_path, text, timestamp
from .protocol import CanonicalAction, EventType

if typ.TYPE_CHECKING:
    from dorametrix.events import EventDto

    from .fields import Body, Headers

_CREATED = "workitem.created"
_UPDATED = "workitem.updated"
_DELETED = "workitem.deleted"
_COMPLETED_REASON = "Completed"

_FIELDS = ("resource", "fields")
_REVISION_FIELDS = ("resource", "revision", "fields")

_OPENED_LABELED = Handler(
    "handle_opened_labeled",
    (
        timestamp("time_created", *_FIELDS, "System.CreatedDate"),
        identifier("id", "resource", "id"),
        text("title", *_FIELDS, "System.Title"),
    ),
)

_CLOSED_UNLABELED = Handler(
    "handle_closed_unlabeled",
    (
        timestamp("time_created", *_REVISION_FIELDS, "System.CreatedDate"),
        timestamp("time_resolved", "createdDate"),
        identifier("id", "resource", "workItemId"),
        text("title", *_REVISION_FIELDS, "System.Title"),
    ),
)

_HANDLERS: dict[CanonicalAction, Handler] = {
    CanonicalAction.OPENED: _OPENED_LABELED,
    CanonicalAction.LABELED: _OPENED_LABELED,
    CanonicalAction.CLOSED: _CLOSED_UNLABELED,
    CanonicalAction.UNLABELED: _CLOSED_UNLABELED,
    CanonicalAction.DELETED: Handler(
        "handle_deleted",
        (
            timestamp("time_created", *_FIELDS, "System.CreatedDate"),
            timestamp("time_resolved", "createdDate"),
            identifier("id", "resource", "id"),
            text("title", *_FIELDS, "System.Title"),
        ),
    ),
}


class AzureParser(ParserBase):
    """Normalize Azure DevOps work item webhooks into incidents."""

    provider: typ.ClassVar[str] = "azure"

    def classify_event_type(
        self, headers: Headers | None, body: Body | None = None
    ) -> EventType:
        """Return ``incident``; Azure webhooks carry nothing else."""
        del headers, body
        return EventType.INCIDENT

    def build_payload(self, headers: Headers | None, body: Body | None) -> EventDto:
        """Normalize a work item created, updated or deleted webhook."""
        del headers
        body = body or {}
        return self._dispatch(body, self._resolve_action(body), _HANDLERS)

    def resolve_repository_name(self, body: Body | None) -> str:
        """Return the area path, namespaced by the first matching team tag.

        Examples
        --------
        >>> parser = AzureParser()
        >>> parser.resolve_repository_name(
        ...     {"resource": {"fields": {
        ...         "System.AreaPath": "Fabrikam",
        ...         "System.Tags": "incident; portal",
        ...     }}}
        ... )
        'Fabrikam/portal'

        """
        fields = resolve_path(body or {}, _REVISION_FIELDS)
        if not isinstance(fields, cabc.Mapping):
            fields = resolve_path(body or {}, _FIELDS)
        if not isinstance(fields, cabc.Mapping):
            return ""

        area_path = fields.get("System.AreaPath")
        if not isinstance(area_path, str):
            area_path = ""
        tags = fields.get("System.Tags")
        for marker in self._config.team_markers:
            if contains_marker(tags, marker):
                return f"{area_path}/{marker}"
        return area_path

    def _resolve_action(self, body: Body) -> CanonicalAction:
        event_type = body.get("eventType")
        if not event_type:
            raise MissingEventError(self.provider)
        if event_type == _CREATED:
            return CanonicalAction.OPENED
        if event_type == _UPDATED:
            return self._updated_action(body)
        if event_type == _DELETED:
            return CanonicalAction.DELETED
        return CanonicalAction.UNRECOGNIZED

    def _updated_action(self, body: Body) -> CanonicalAction:
        tag = self._config.incident_label
        reason = resolve_path(body, (*_REVISION_FIELDS, "System.Reason"))
        revision_tags = resolve_path(body, (*_REVISION_FIELDS, "System.Tags"))
        if reason == _COMPLETED_REASON and contains_marker(revision_tags, tag):
            return CanonicalAction.CLOSED

        now_tagged = contains_marker(
            resolve_path(body, (*_FIELDS, "System.Tags", "newValue")), tag
        )
        was_tagged = contains_marker(
            resolve_path(body, (*_FIELDS, "System.Tags", "oldValue")), tag
        )
        if now_tagged and not was_tagged:
            return CanonicalAction.LABELED
        if was_tagged and not now_tagged:
            return CanonicalAction.UNLABELED
        return CanonicalAction.UNRECOGNIZED
