"""
Reconciliation of configured jobs with the session history.

Produces one JobStatusRecord per scheduled, non-manual job that has run at
least once, describing its most recent session.
"""

import html
from collections.abc import Iterable
from datetime import UTC, datetime

from vbrstatus.config import JobTypeCatalog
from vbrstatus.core.datetime_utils import to_aware_utc, to_epoch_offset
from vbrstatus.core.errors import PayloadError
from vbrstatus.core.logging import get_logger
from vbrstatus.pipeline.payloads import failure_titles, parse_job_options, parse_session_log
from vbrstatus.schemas.job import ConfiguredJob, JobSession, JobStatusRecord

logger = get_logger(__name__)

_UNDATED = datetime.min.replace(tzinfo=UTC)


def _created_at(session: JobSession) -> datetime:
    if session.creation_time is None:
        return _UNDATED
    return to_aware_utc(session.creation_time)


def latest_sessions(sessions: Iterable[JobSession]) -> dict[str, JobSession]:
    """
    Most recent session per job name.

    Sessions without a creation time lose against any dated session. When two
    sessions share the maximum creation time, the last one encountered wins.
    """
    latest: dict[str, JobSession] = {}
    for session in sessions:
        current = latest.get(session.job_name)
        if current is None or _created_at(session) >= _created_at(current):
            latest[session.job_name] = session
    return latest


def build_reason(session: JobSession) -> str:
    """Session reason followed by the titles of failed log entries, one per line.

    Raises:
        PayloadError: the session log cannot be parsed
    """
    titles = failure_titles(parse_session_log(session.log_xml))
    return "\n".join([session.reason or "", *titles])


def build_status_record(session: JobSession, catalog: JobTypeCatalog) -> JobStatusRecord:
    """Shape a session into the record sent to Zabbix."""
    return JobStatusRecord(
        job_id=session.job_id,
        job_type_id=session.job_type,
        job_type_name=catalog.label(session.job_type),
        job_name=html.escape(session.job_name),
        result=session.result,
        retry=session.is_retry,
        reason=html.escape(build_reason(session)),
        progress=session.progress,
        start=to_epoch_offset(session.creation_time),
        end=to_epoch_offset(session.end_time),
    )


def reconcile(
    configured_jobs: Iterable[ConfiguredJob],
    sessions: Iterable[JobSession],
    catalog: JobTypeCatalog,
) -> list[JobStatusRecord]:
    """
    Build the last known status of every scheduled job.

    Jobs flagged RunManually and jobs without any session are left out. A job
    whose options or log payload is malformed is skipped with a diagnostic;
    the rest of the batch is unaffected. Duplicate job names yield duplicate
    records.

    Args:
        configured_jobs: Schedule-enabled jobs (filtered by the query)
        sessions: Full session history
        catalog: Job type labels

    Returns:
        One record per reported job, in configured-job order
    """
    latest = latest_sessions(sessions)
    records: list[JobStatusRecord] = []
    skipped = 0

    for job in configured_jobs:
        try:
            if parse_job_options(job.options).run_manually:
                continue

            session = latest.get(job.name)
            if session is None:
                logger.bind(job=job.name).debug("job_has_no_sessions")
                continue

            records.append(build_status_record(session, catalog))
        except PayloadError as e:
            skipped += 1
            logger.bind(job=job.name, payload=e.kind, error=e.detail).warning(
                "job_payload_invalid"
            )

    logger.bind(records=len(records), skipped=skipped).debug("jobs_reconciled")
    return records
