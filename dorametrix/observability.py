"""Structured diagnostic events for ingestion and metric computation.

Data-quality problems never abort normalization or a metrics report; they
are reported through the logger objects in this module instead. Components
receive a logger at construction so callers and tests can substitute their
own.

Usage
-----
>>> event_logger = MetricsEventLogger()
>>> event_logger.log_incident_skipped(
...     repo_name="octo/reef",
...     incident_id="42",
...     time_created="1700000500000",
...     time_resolved="1700000000000",
...     reason=SkipReason.INVERTED,
... )

"""

from __future__ import annotations

import enum

from dorametrix.logging import LogLevel, get_logger, log_event

logger = get_logger(__name__)


class IngestionEventType(enum.StrEnum):
    """Log event identifiers emitted while normalizing webhooks."""

    WEBHOOK_NORMALIZED = "ingestion.webhook.normalized"
    WEBHOOK_IGNORED = "ingestion.webhook.ignored"
    WEBHOOK_REJECTED = "ingestion.webhook.rejected"
    EVENT_INCONSISTENT = "ingestion.event.inconsistent"


class MetricsEventType(enum.StrEnum):
    """Log event identifiers emitted while computing metrics."""

    DEPLOYMENT_SKIPPED = "metrics.deployment.skipped"
    INCIDENT_SKIPPED = "metrics.incident.skipped"


class SkipReason(enum.StrEnum):
    """Why a record was left out of a metric."""

    INVERTED = "inverted"
    MALFORMED = "malformed"


class IngestionEventLogger:
    """Emit webhook normalization events via femtologging."""

    def log_webhook_normalized(
        self,
        *,
        provider: str,
        event_type: str,
        repo_name: str,
        event_id: str,
    ) -> None:
        """Log a webhook that produced a canonical record."""
        log_event(
            logger,
            LogLevel.INFO,
            IngestionEventType.WEBHOOK_NORMALIZED,
            provider=provider,
            event_type=event_type,
            repo_name=repo_name,
            event_id=event_id,
        )

    def log_webhook_ignored(self, *, provider: str) -> None:
        """Log a webhook whose event or action no handler recognizes."""
        log_event(
            logger, LogLevel.INFO, IngestionEventType.WEBHOOK_IGNORED, provider=provider
        )

    def log_webhook_rejected(self, *, provider: str, error: BaseException) -> None:
        """Log a webhook that failed normalization, attaching ``error``."""
        log_event(
            logger,
            LogLevel.ERROR,
            IngestionEventType.WEBHOOK_REJECTED,
            exc_info=error,
            provider=provider,
            error_type=type(error).__name__,
            error_message=str(error),
        )

    def log_inconsistent_event(
        self,
        *,
        provider: str,
        event_id: str,
        time_created: str,
        time_resolved: str,
    ) -> None:
        """Log a normalized event that resolves before it was created."""
        log_event(
            logger,
            LogLevel.WARNING,
            IngestionEventType.EVENT_INCONSISTENT,
            provider=provider,
            event_id=event_id,
            time_created=time_created,
            time_resolved=time_resolved,
        )


class MetricsEventLogger:
    """Emit metric data-quality events via femtologging."""

    def log_deployment_skipped(
        self,
        *,
        repo_name: str,
        deployment_id: str,
        first_change_time: str,
        deployment_time: str,
        reason: SkipReason,
    ) -> None:
        """Log a deployment that contributes no lead time.

        Parameters
        ----------
        repo_name
            Repository the metrics are computed for.
        deployment_id
            Identifier of the skipped deployment.
        first_change_time
            Earliest bundled change time, or ``""`` when none is usable.
        deployment_time
            The deployment's own ``time_created``.
        reason
            ``inverted`` when the earliest change postdates the deployment,
            ``malformed`` when a timestamp is not an epoch digit string.

        """
        log_event(
            logger,
            LogLevel.WARNING,
            MetricsEventType.DEPLOYMENT_SKIPPED,
            repo_name=repo_name,
            deployment_id=deployment_id,
            first_change_time=first_change_time,
            deployment_time=deployment_time,
            reason=reason,
        )

    def log_incident_skipped(
        self,
        *,
        repo_name: str,
        incident_id: str,
        time_created: str,
        time_resolved: str | None,
        reason: SkipReason,
    ) -> None:
        """Log an incident left out of the restore time average."""
        log_event(
            logger,
            LogLevel.WARNING,
            MetricsEventType.INCIDENT_SKIPPED,
            repo_name=repo_name,
            incident_id=incident_id,
            time_created=time_created,
            time_resolved=time_resolved,
            reason=reason,
        )
