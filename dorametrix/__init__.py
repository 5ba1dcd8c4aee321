"""Dorametrix: webhook normalization and DORA metrics."""

from __future__ import annotations

from dorametrix.config import DorametrixConfig
from dorametrix.events import (
    Change,
    Deployment,
    DeploymentChange,
    DeploymentResponse,
    EventDto,
    Incident,
)
from dorametrix.metrics import Dorametrix, MetricsReport, create_dorametrix

__all__ = [
    "Change",
    "Deployment",
    "DeploymentChange",
    "DeploymentResponse",
    "Dorametrix",
    "DorametrixConfig",
    "EventDto",
    "Incident",
    "MetricsReport",
    "create_dorametrix",
]
