"""Route webhook deliveries through provider parsers into a caller's sink.

The ingestion layer that receives HTTP requests owns persistence; this
service only selects the parser, normalizes the delivery, and hands
recognized records to an :class:`EventSink`.

Usage
-----
>>> from dorametrix.parsers import create_parsers
>>> records: list[NormalizedWebhook] = []
>>> class ListSink:
...     def append(self, webhook: NormalizedWebhook) -> None:
...         records.append(webhook)
>>> service = WebhookIngestionService(create_parsers(), ListSink())
>>> service.ingest("github", {"X-GitHub-Event": "issues"}, {"action": "edited"})

"""

from __future__ import annotations

import dataclasses
import typing as typ

from dorametrix.observability import IngestionEventLogger
from dorametrix.parsers.errors import ParserError, UnsupportedProviderError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from dorametrix.events import EventDto
    from dorametrix.parsers.fields import Body, Headers
    from dorametrix.parsers.protocol import EventType, Parser


@dataclasses.dataclass(frozen=True, slots=True)
class NormalizedWebhook:
    """A recognized webhook ready for storage."""

    provider: str
    event_type: EventType
    repo_name: str
    event: EventDto


class EventSink(typ.Protocol):
    """Caller-owned store that receives normalized webhooks."""

    def append(self, webhook: NormalizedWebhook) -> None:
        """Persist one normalized webhook."""
        ...


class WebhookIngestionService:
    """Normalize webhook deliveries and forward recognized records."""

    def __init__(
        self,
        parsers: cabc.Mapping[str, Parser],
        sink: EventSink,
        *,
        event_logger: IngestionEventLogger | None = None,
    ) -> None:
        """Create a service over a provider-to-parser mapping."""
        self._parsers = {name.lower(): parser for name, parser in parsers.items()}
        self._sink = sink
        self._event_logger = event_logger or IngestionEventLogger()

    def _parser_for(self, provider: str) -> Parser:
        parser = self._parsers.get(provider.strip().lower())
        if parser is None:
            raise UnsupportedProviderError(provider, tuple(sorted(self._parsers)))
        return parser

    def ingest(
        self,
        provider: str,
        headers: Headers | None,
        body: Body | None,
    ) -> NormalizedWebhook | None:
        """Normalize one delivery and append it to the sink.

        Parameters
        ----------
        provider
            Identifier of the provider that sent the webhook.
        headers
            Request headers; names are matched case-insensitively.
        body
            Decoded JSON body.

        Returns
        -------
        NormalizedWebhook | None
            The stored record, or ``None`` when the delivery describes an
            event or action no handler recognizes. The payload is normalized
            before it is classified, so such deliveries are dropped rather
            than rejected.

        Raises
        ------
        ParserError
            If the provider is unknown or the payload cannot be normalized.
            The failure is logged before it propagates.

        """
        try:
            parser = self._parser_for(provider)
            event = parser.build_payload(headers, body)
            event_type = (
                None
                if event.is_unknown
                else parser.classify_event_type(headers, body)
            )
        except ParserError as exc:
            self._event_logger.log_webhook_rejected(provider=provider, error=exc)
            raise

        if event_type is None:
            self._event_logger.log_webhook_ignored(provider=parser.provider)
            return None

        webhook = NormalizedWebhook(
            provider=parser.provider,
            event_type=event_type,
            repo_name=parser.resolve_repository_name(body),
            event=event,
        )
        self._sink.append(webhook)
        self._event_logger.log_webhook_normalized(
            provider=webhook.provider,
            event_type=webhook.event_type,
            repo_name=webhook.repo_name,
            event_id=event.id,
        )
        return webhook
