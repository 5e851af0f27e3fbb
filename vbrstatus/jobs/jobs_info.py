"""
JobsInfo: last known status of every scheduled job.

This job:
1. Reads the full session history
2. Reads the schedule-enabled jobs of the supported types
3. Reconciles both into one record per job and emits them as a JSON array

Any query failure degrades to an empty array.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ValidationError

from vbrstatus.config import AppConfig
from vbrstatus.core.logging import get_logger
from vbrstatus.jobs.utils import dump_records, report_failure
from vbrstatus.pipeline.reconcile import reconcile
from vbrstatus.queries import configured_jobs_query, job_sessions_query
from vbrstatus.schemas.job import ConfiguredJob, JobSession, JobStatusRecord
from vbrstatus.services.query_executor import QueryExecutor, QueryFailure
from vbrstatus.services.sender import OutputSink

logger = get_logger(__name__)


def _validate_rows[ModelT: BaseModel](
    model: type[ModelT], rows: Iterable[dict[str, Any]]
) -> list[ModelT]:
    """Validate database rows, skipping those that do not fit the model."""
    items: list[ModelT] = []
    for row in rows:
        try:
            items.append(model.model_validate(row))
        except ValidationError as e:
            logger.bind(model=model.__name__, error=str(e)).warning("row_invalid")
    return items


def collect_job_statuses(executor: QueryExecutor, config: AppConfig) -> list[JobStatusRecord]:
    """Query both job sources and reconcile them; empty on any query failure."""
    sessions_result = executor.execute(job_sessions_query())
    if isinstance(sessions_result, QueryFailure):
        report_failure(sessions_result)
        return []

    jobs_result = executor.execute(configured_jobs_query(config.job_types.codes))
    if isinstance(jobs_result, QueryFailure):
        report_failure(jobs_result)
        return []

    sessions = _validate_rows(JobSession, sessions_result.rows)
    jobs = _validate_rows(ConfiguredJob, jobs_result.rows)
    logger.bind(sessions=len(sessions), jobs=len(jobs)).debug("jobs_info_loaded")

    return reconcile(jobs, sessions, config.job_types)


def main(config: AppConfig, executor: QueryExecutor, sink: OutputSink) -> None:
    """Run the JobsInfo collection."""
    records = collect_job_statuses(executor, config)
    sink.emit(config.zabbix.key("jobs.info"), dump_records(records))
    logger.bind(records=len(records)).info("jobs_info_completed")
