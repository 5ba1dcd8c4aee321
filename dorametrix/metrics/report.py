"""Result structures for a complete metrics report."""

from __future__ import annotations

import msgspec

from dorametrix.events import DeploymentResponse  # noqa: TC001


class MetricsPeriod(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Window the report covers, as epoch digit strings."""

    from_timestamp: str
    to_timestamp: str


class MetricsTotals(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Record counts the report was computed from."""

    changes_count: int
    deployment_count: int
    incident_count: int


class DoraMetrics(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """The four DORA metrics in their display formats.

    Attributes
    ----------
    deployment_frequency
        Deployments per day, two decimals.
    lead_time_for_changes
        Average change-to-deployment time as ``DD:HH:MM:SS``.
    change_failure_rate
        Incidents per deployment, two decimals.
    time_to_restore_services
        Average incident duration as ``DD:HH:MM:SS``.

    """

    deployment_frequency: str
    lead_time_for_changes: str
    change_failure_rate: str
    time_to_restore_services: str


class MetricsReport(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Everything one metrics request returns for a repository."""

    repo_name: str
    period: MetricsPeriod
    total: MetricsTotals
    metrics: DoraMetrics
    last_deployment: DeploymentResponse

    def to_json(self) -> str:
        """Encode the report as JSON with camelCase keys."""
        return msgspec.json.encode(self).decode()
