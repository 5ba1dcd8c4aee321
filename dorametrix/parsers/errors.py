"""Errors raised while normalizing provider webhooks."""

from __future__ import annotations


class ParserError(Exception):
    """Base class for webhook normalization failures."""


class MissingEventError(ParserError):
    """Raised when a webhook carries no event signal at all."""

    def __init__(self, provider: str) -> None:
        """Record the provider whose webhook lacked an event."""
        self.provider = provider
        super().__init__(f"{provider} webhook carries no recognizable event")


class UnknownEventTypeError(ParserError):
    """Raised when a declared event type has no provider mapping."""

    def __init__(self, provider: str, event_type: str) -> None:
        """Record the provider and the unmapped event type."""
        self.provider = provider
        self.event_type = event_type
        super().__init__(f"{provider} event type {event_type!r} is not supported")


class _HandlerFieldError(ParserError):
    """Shared shape for errors naming the failing handler and field."""

    def __init__(self, message: str, *, handler: str, field: str) -> None:
        self.handler = handler
        self.field = field
        super().__init__(message)


class MissingEventTimeError(_HandlerFieldError):
    """Raised when a resolved action lacks a timestamp it requires."""

    @classmethod
    def for_handler(cls, handler: str, field: str) -> MissingEventTimeError:
        """Return an error for an absent timestamp field."""
        return cls(
            f"Missing expected timestamp {field!r} in {handler}()",
            handler=handler,
            field=field,
        )

    @classmethod
    def invalid(cls, handler: str, field: str, value: object) -> MissingEventTimeError:
        """Return an error for a timestamp field that cannot be parsed."""
        return cls(
            f"Unparseable timestamp {field!r}={value!r} in {handler}()",
            handler=handler,
            field=field,
        )


class MissingIdError(_HandlerFieldError):
    """Raised when a resolved action lacks its identifier."""

    @classmethod
    def for_handler(cls, handler: str, field: str) -> MissingIdError:
        """Return an error for an absent identifier field."""
        return cls(
            f"Missing ID {field!r} in {handler}()",
            handler=handler,
            field=field,
        )


class UnsupportedProviderError(ParserError):
    """Raised when no parser is registered for a provider identifier."""

    def __init__(self, provider: str, known: tuple[str, ...]) -> None:
        """Record the requested provider and the registered ones."""
        self.provider = provider
        self.known = known
        super().__init__(
            f"No parser for provider {provider!r}; expected one of {', '.join(known)}"
        )
