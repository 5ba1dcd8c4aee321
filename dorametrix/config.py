"""Runtime configuration for parsers and logging.

Usage
-----
Create a configuration with defaults:

>>> config = DorametrixConfig()
>>> config.team_markers
('intocare', 'portal')

Or load from environment variables:

>>> import os
>>> os.environ["DORAMETRIX_INCIDENT_LABEL"] = "outage"
>>> DorametrixConfig.from_env().incident_label
'outage'

"""

from __future__ import annotations

import dataclasses as dc
import os

from dorametrix.logging import normalize_log_level

_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_INCIDENT_LABEL = "incident"
_DEFAULT_TEAM_MARKERS = ("intocare", "portal")


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""

    @classmethod
    def invalid_log_level(cls, raw: str) -> ConfigError:
        """Return an error for an unrecognised log level."""
        return cls(f"DORAMETRIX_LOG_LEVEL is not a valid log level: {raw!r}")

    @classmethod
    def empty_value(cls, env_var: str) -> ConfigError:
        """Return an error for a variable that is set but blank."""
        return cls(f"{env_var} must not be empty")


@dc.dataclass(frozen=True, slots=True)
class DorametrixConfig:
    """Settings shared by the provider parsers and the logging setup.

    Attributes
    ----------
    log_level
        femtologging level applied by ``configure_logging``.
    incident_label
        Tag or label that marks a work item or issue as an incident.
    team_markers
        Ordered work item tags that namespace an Azure area path. The first
        marker found in the tags wins and is appended as ``/<marker>``.

    """

    log_level: str = _DEFAULT_LOG_LEVEL
    incident_label: str = _DEFAULT_INCIDENT_LABEL
    team_markers: tuple[str, ...] = _DEFAULT_TEAM_MARKERS

    @staticmethod
    def _parse_markers(raw: str) -> tuple[str, ...]:
        markers = tuple(part.strip() for part in raw.split(",") if part.strip())
        if not markers:
            raise ConfigError.empty_value("DORAMETRIX_TEAM_MARKERS")
        return markers

    @classmethod
    def from_env(cls) -> DorametrixConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``DORAMETRIX_LOG_LEVEL``: femtologging level name.
        - ``DORAMETRIX_INCIDENT_LABEL``: label marking incidents.
        - ``DORAMETRIX_TEAM_MARKERS``: comma-separated team tags.

        Raises
        ------
        ConfigError
            If a variable is set to an invalid or blank value.

        """
        raw_level = os.environ.get("DORAMETRIX_LOG_LEVEL")
        log_level = _DEFAULT_LOG_LEVEL
        if raw_level is not None:
            log_level, invalid = normalize_log_level(raw_level)
            if invalid:
                raise ConfigError.invalid_log_level(raw_level)

        incident_label = _DEFAULT_INCIDENT_LABEL
        raw_label = os.environ.get("DORAMETRIX_INCIDENT_LABEL")
        if raw_label is not None:
            incident_label = raw_label.strip()
            if not incident_label:
                raise ConfigError.empty_value("DORAMETRIX_INCIDENT_LABEL")

        team_markers = _DEFAULT_TEAM_MARKERS
        raw_markers = os.environ.get("DORAMETRIX_TEAM_MARKERS")
        if raw_markers is not None:
            team_markers = cls._parse_markers(raw_markers)

        return cls(
            log_level=log_level,
            incident_label=incident_label,
            team_markers=team_markers,
        )
