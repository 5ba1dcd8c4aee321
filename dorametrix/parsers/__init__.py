"""Provider webhook parsers and the canonical vocabularies they map into."""

from __future__ import annotations

from .azure import AzureParser
from .errors import (
    MissingEventError,
    MissingEventTimeError,
    MissingIdError,
    ParserError,
    UnknownEventTypeError,
    UnsupportedProviderError,
)
from .factory import create_parser, create_parsers, supported_providers
from .github import GitHubParser
from .protocol import CanonicalAction, EventType, Parser

__all__ = [
    "AzureParser",
    "CanonicalAction",
    "EventType",
    "GitHubParser",
    "MissingEventError",
    "MissingEventTimeError",
    "MissingIdError",
    "Parser",
    "ParserError",
    "UnknownEventTypeError",
    "UnsupportedProviderError",
    "create_parser",
    "create_parsers",
    "supported_providers",
]
