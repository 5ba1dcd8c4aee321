"""Compute the four DORA metrics from canonical records.

Every computation is a single pass over caller-supplied, immutable records.
Inconsistent data never raises: a deployment shipped before its earliest
change contributes zero lead time, and an incident resolved before it was
opened is left out of the restore time average. Records whose timestamps
are not epoch digit strings are skipped the same way. Every skip is
reported through the injected :class:`MetricsEventLogger`.

Usage
-----
>>> engine = create_dorametrix("octo/reef")
>>> engine.get_change_failure_rate(1, 4)
'0.25'
>>> engine.get_deployment_frequency(4, "1700000000", "1700172800")
'2.00'

"""

from __future__ import annotations

import typing as typ

from dorametrix.common.time import (
    ZERO_ELAPSED,
    days_in_scope,
    is_epoch_timestamp,
    now_ms,
    pad_to_milliseconds,
    prettify_time,
    seconds_between,
    to_milliseconds,
)
from dorametrix.events import DeploymentResponse
from dorametrix.logging import get_logger, log_debug, log_warning
from dorametrix.observability import MetricsEventLogger, SkipReason

from .report import DoraMetrics, MetricsPeriod, MetricsReport, MetricsTotals

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from dorametrix.events import Change, Deployment, Incident

logger = get_logger(__name__)

ZERO_RATE = "0.00"


def _format_rate(value: float) -> str:
    return f"{value:.2f}"


def _deployment_order(deployment: Deployment) -> int:
    if is_epoch_timestamp(deployment.time_created):
        return to_milliseconds(deployment.time_created)
    return -1


class Dorametrix:
    """DORA metric computations for one repository.

    Parameters
    ----------
    repo_name
        Repository or workspace the records belong to; used in diagnostics
        and reports only.
    event_logger
        Receives data-quality events. Defaults to a femtologging-backed
        :class:`MetricsEventLogger`.
    clock
        Returns the current time as an epoch-millisecond string; measures
        incidents that are still open.

    """

    def __init__(
        self,
        repo_name: str,
        *,
        event_logger: MetricsEventLogger | None = None,
        clock: cabc.Callable[[], str] = now_ms,
    ) -> None:
        """Bind the engine to a repository and its collaborators."""
        self._repo_name = repo_name
        self._event_logger = event_logger or MetricsEventLogger()
        self._clock = clock

    @property
    def repo_name(self) -> str:
        """Return the repository name the engine was created for."""
        return self._repo_name

    def get_last_deployment(self, deployment: Deployment | None) -> DeploymentResponse:
        """Return the most recent change shipped in ``deployment``.

        The greatest ``time_created`` string wins and the first change wins
        ties. A seconds-resolution result is padded to milliseconds. A
        deployment without changes yields empty strings.
        """
        if deployment is None or not deployment.changes:
            return DeploymentResponse(id="", time_created="")

        latest = max(deployment.changes, key=lambda change: change.time_created)
        return DeploymentResponse(
            id=latest.id,
            time_created=pad_to_milliseconds(latest.time_created),
        )

    def get_deployment_frequency(
        self,
        deployment_count: int,
        from_timestamp: str,
        to_timestamp: str,
    ) -> str:
        """Return average deployments per day over the window.

        The window counts at least one day, so equal or reversed bounds
        never divide by zero. Malformed bounds count as a one-day window.
        """
        if not (
            is_epoch_timestamp(from_timestamp) and is_epoch_timestamp(to_timestamp)
        ):
            log_warning(
                logger,
                "Malformed metrics window for repo_name=%s from=%r to=%r; "
                "using one day",
                self._repo_name,
                from_timestamp,
                to_timestamp,
            )
            return _format_rate(float(deployment_count))

        days = days_in_scope(from_timestamp, to_timestamp)
        return _format_rate(deployment_count / days)

    def get_lead_time_for_changes(
        self,
        changes: cabc.Sequence[Change],
        deployments: cabc.Sequence[Deployment],
    ) -> str:
        """Return the average time from first change to deployment.

        Parameters
        ----------
        changes
            Changes recorded in the window. Lead time is measured from the
            changes bundled in each deployment, so these only feed
            diagnostics.
        deployments
            Deployments recorded in the window.

        Returns
        -------
        str
            Average lead time as ``DD:HH:MM:SS``; ``00:00:00:00`` when there
            are no deployments.

        """
        if not deployments:
            return ZERO_ELAPSED

        log_debug(
            logger,
            "Computing lead time for repo_name=%s changes=%d deployments=%d",
            self._repo_name,
            len(changes),
            len(deployments),
        )
        accumulated = sum(self._lead_time(deployment) for deployment in deployments)
        return prettify_time(accumulated / len(deployments))

    def _lead_time(self, deployment: Deployment) -> float:
        if not deployment.changes:
            return 0.0

        change_times = [
            change.time_created
            for change in deployment.changes
            if is_epoch_timestamp(change.time_created)
        ]
        first_match = min(change_times, key=to_milliseconds, default="")
        if not first_match or not is_epoch_timestamp(deployment.time_created):
            self._skip_deployment(deployment, first_match, SkipReason.MALFORMED)
            return 0.0
        if to_milliseconds(first_match) > to_milliseconds(deployment.time_created):
            self._skip_deployment(deployment, first_match, SkipReason.INVERTED)
            return 0.0

        return seconds_between(first_match, deployment.time_created)

    def _skip_deployment(
        self, deployment: Deployment, first_change_time: str, reason: SkipReason
    ) -> None:
        self._event_logger.log_deployment_skipped(
            repo_name=self._repo_name,
            deployment_id=deployment.id,
            first_change_time=first_change_time,
            deployment_time=deployment.time_created,
            reason=reason,
        )

    def get_change_failure_rate(self, incident_count: int, deployment_count: int) -> str:
        """Return incidents per deployment, or ``0.00`` if either count is 0."""
        if incident_count == 0 or deployment_count == 0:
            return ZERO_RATE
        return _format_rate(incident_count / deployment_count)

    @staticmethod
    def _unusable(incident: Incident) -> SkipReason | None:
        resolved = incident.time_resolved
        if not is_epoch_timestamp(incident.time_created) or (
            resolved and not is_epoch_timestamp(resolved)
        ):
            return SkipReason.MALFORMED
        if resolved and to_milliseconds(incident.time_created) > to_milliseconds(
            resolved
        ):
            return SkipReason.INVERTED
        return None

    def get_time_to_restore_services(self, incidents: cabc.Sequence[Incident]) -> str:
        """Return the average incident duration as ``DD:HH:MM:SS``.

        Open incidents are measured up to now. Incidents resolved before
        they were created, or carrying malformed timestamps, are skipped and
        do not count towards the average.
        """
        if not incidents:
            return ZERO_ELAPSED

        now = self._clock()
        accumulated = 0.0
        counted = 0
        for incident in incidents:
            reason = self._unusable(incident)
            if reason is not None:
                self._event_logger.log_incident_skipped(
                    repo_name=self._repo_name,
                    incident_id=incident.id,
                    time_created=incident.time_created,
                    time_resolved=incident.time_resolved,
                    reason=reason,
                )
                continue

            accumulated += seconds_between(
                incident.time_created, incident.time_resolved or now
            )
            counted += 1

        if counted == 0:
            return ZERO_ELAPSED
        return prettify_time(accumulated / counted)

    def get_metrics(  # noqa: PLR0913
        self,
        changes: cabc.Sequence[Change],
        deployments: cabc.Sequence[Deployment],
        incidents: cabc.Sequence[Incident],
        from_timestamp: str,
        to_timestamp: str,
    ) -> MetricsReport:
        """Compute every metric for one window.

        The last deployment lookup runs over the deployment with the newest
        ``time_created``; deployments with malformed times rank last.
        """
        newest = max(deployments, key=_deployment_order, default=None)
        return MetricsReport(
            repo_name=self._repo_name,
            period=MetricsPeriod(
                from_timestamp=from_timestamp,
                to_timestamp=to_timestamp,
            ),
            total=MetricsTotals(
                changes_count=len(changes),
                deployment_count=len(deployments),
                incident_count=len(incidents),
            ),
            metrics=DoraMetrics(
                deployment_frequency=self.get_deployment_frequency(
                    len(deployments), from_timestamp, to_timestamp
                ),
                lead_time_for_changes=self.get_lead_time_for_changes(
                    changes, deployments
                ),
                change_failure_rate=self.get_change_failure_rate(
                    len(incidents), len(deployments)
                ),
                time_to_restore_services=self.get_time_to_restore_services(
                    incidents
                ),
            ),
            last_deployment=self.get_last_deployment(newest),
        )


def create_dorametrix(
    repo_name: str,
    *,
    event_logger: MetricsEventLogger | None = None,
) -> Dorametrix:
    """Create a metrics engine for ``repo_name``."""
    return Dorametrix(repo_name, event_logger=event_logger)
