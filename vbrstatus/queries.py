"""Fixed read-only statements against the Veeam configuration database."""

from collections.abc import Iterable

from sqlalchemy import Select, func, select, true

from vbrstatus.models import BJobRow, JobSessionRow


def job_sessions_query() -> Select:
    """Full job session history, oldest first.

    The ordering makes "last encountered" a stable tie-break for sessions
    sharing a creation time.
    """
    return select(
        JobSessionRow.job_id,
        JobSessionRow.job_type,
        JobSessionRow.job_name,
        JobSessionRow.result,
        JobSessionRow.is_retry,
        JobSessionRow.reason,
        JobSessionRow.log_xml,
        JobSessionRow.progress,
        JobSessionRow.creation_time,
        JobSessionRow.end_time,
    ).order_by(JobSessionRow.creation_time, JobSessionRow.id)


def _scheduled_of_types(type_codes: Iterable[int]):
    # SQL Server rejects IS against a bit literal
    return (
        BJobRow.schedule_enabled == true(),
        BJobRow.type.in_(list(type_codes)),
    )


def configured_jobs_query(type_codes: Iterable[int]) -> Select:
    """Schedule-enabled jobs of the supported types."""
    return select(
        BJobRow.name,
        BJobRow.type,
        BJobRow.schedule_enabled,
        BJobRow.options,
    ).where(*_scheduled_of_types(type_codes))


def total_jobs_query(type_codes: Iterable[int]) -> Select:
    """Number of schedule-enabled jobs of the supported types."""
    return select(func.count()).select_from(BJobRow).where(*_scheduled_of_types(type_codes))
