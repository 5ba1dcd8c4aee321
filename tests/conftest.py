"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest

from dorametrix.config import DorametrixConfig
from dorametrix.metrics import Dorametrix
from dorametrix.parsers import AzureParser, GitHubParser
from tests.helpers.event_loggers import (
    RecordingIngestionEventLogger,
    RecordingMetricsEventLogger,
)
from tests.helpers.webhooks import FIXED_NOW_MS

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@pytest.fixture
def fixed_clock() -> cabc.Callable[[], str]:
    """Return a clock frozen at ``FIXED_NOW_MS``."""
    return lambda: FIXED_NOW_MS


@pytest.fixture
def config() -> DorametrixConfig:
    """Return the default configuration."""
    return DorametrixConfig()


@pytest.fixture
def ingestion_logger() -> RecordingIngestionEventLogger:
    """Return an ingestion logger that records events in memory."""
    return RecordingIngestionEventLogger()


@pytest.fixture
def metrics_logger() -> RecordingMetricsEventLogger:
    """Return a metrics logger that records events in memory."""
    return RecordingMetricsEventLogger()


@pytest.fixture
def github_parser(
    config: DorametrixConfig,
    fixed_clock: cabc.Callable[[], str],
    ingestion_logger: RecordingIngestionEventLogger,
) -> GitHubParser:
    """Return a GitHub parser with a frozen clock."""
    return GitHubParser(config, clock=fixed_clock, event_logger=ingestion_logger)


@pytest.fixture
def azure_parser(
    config: DorametrixConfig,
    fixed_clock: cabc.Callable[[], str],
    ingestion_logger: RecordingIngestionEventLogger,
) -> AzureParser:
    """Return an Azure DevOps parser with a frozen clock."""
    return AzureParser(config, clock=fixed_clock, event_logger=ingestion_logger)


@pytest.fixture
def engine(
    metrics_logger: RecordingMetricsEventLogger,
    fixed_clock: cabc.Callable[[], str],
) -> Dorametrix:
    """Return a metrics engine with a frozen clock and recording logger."""
    return Dorametrix("octo/reef", event_logger=metrics_logger, clock=fixed_clock)
