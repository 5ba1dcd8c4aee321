"""Select provider parsers by identifier."""

from __future__ import annotations

import typing as typ

from .azure import AzureParser
from .errors import UnsupportedProviderError
from .github import GitHubParser

if typ.TYPE_CHECKING:
    from dorametrix.config import DorametrixConfig

    from .protocol import Parser

_PARSERS: dict[str, type[GitHubParser | AzureParser]] = {
    GitHubParser.provider: GitHubParser,
    AzureParser.provider: AzureParser,
}


def supported_providers() -> tuple[str, ...]:
    """Return the provider identifiers with a registered parser."""
    return tuple(sorted(_PARSERS))


def create_parser(provider: str, config: DorametrixConfig | None = None) -> Parser:
    """Create the parser registered for ``provider``.

    Parameters
    ----------
    provider
        Provider identifier such as ``github`` or ``azure``; matched
        case-insensitively.
    config
        Optional configuration shared with the parser.

    Raises
    ------
    UnsupportedProviderError
        If no parser is registered for the identifier.

    Examples
    --------
    >>> create_parser("GitHub").provider
    'github'

    """
    parser_cls = _PARSERS.get(provider.strip().lower())
    if parser_cls is None:
        raise UnsupportedProviderError(provider, supported_providers())
    return parser_cls(config)


def create_parsers(config: DorametrixConfig | None = None) -> dict[str, Parser]:
    """Return one parser per supported provider, keyed by identifier."""
    return {name: parser_cls(config) for name, parser_cls in _PARSERS.items()}
