"""DORA metric computations over canonical records."""

from __future__ import annotations

from .engine import Dorametrix, create_dorametrix
from .report import DoraMetrics, MetricsPeriod, MetricsReport, MetricsTotals

__all__ = [
    "DoraMetrics",
    "Dorametrix",
    "MetricsPeriod",
    "MetricsReport",
    "MetricsTotals",
    "create_dorametrix",
]
