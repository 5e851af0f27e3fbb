"""
TotalJob: number of schedule-enabled jobs of the supported types.

Emits a bare integer. When the database cannot be queried nothing is emitted,
so Zabbix records the item as unsupported instead of a misleading zero.
"""

from vbrstatus.config import AppConfig
from vbrstatus.core.logging import get_logger
from vbrstatus.jobs.utils import report_failure
from vbrstatus.queries import total_jobs_query
from vbrstatus.services.query_executor import QueryExecutor, QueryFailure
from vbrstatus.services.sender import OutputSink

logger = get_logger(__name__)


def count_jobs(executor: QueryExecutor, config: AppConfig) -> int | None:
    """Number of active jobs, or None if the query failed."""
    result = executor.execute(total_jobs_query(config.job_types.codes))
    if isinstance(result, QueryFailure):
        report_failure(result)
        return None
    return int(result.scalar() or 0)


def main(config: AppConfig, executor: QueryExecutor, sink: OutputSink) -> None:
    """Run the TotalJob collection."""
    total = count_jobs(executor, config)
    if total is None:
        return
    sink.emit(config.zabbix.key("jobs.total"), str(total))
    logger.bind(total=total).info("total_job_completed")
