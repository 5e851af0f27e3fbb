"""
Shared utilities for the collection jobs.

Common functions used by repo_info.py, jobs_info.py and total_job.py.
"""

from collections.abc import Sequence

import typer
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from vbrstatus.config import Settings
from vbrstatus.core.database import create_db_engine
from vbrstatus.core.retry import RetryConfig
from vbrstatus.services.query_executor import QueryExecutor, QueryFailure


def build_executor(settings: Settings) -> QueryExecutor:
    """Executor for the configured database, with one reconnect attempt."""
    retry = RetryConfig(
        max_attempts=2,
        backoff_base=settings.connect_retry_delay,
        retryable_exceptions=(SQLAlchemyError,),
    )
    return QueryExecutor(create_db_engine(settings), retry=retry)


def dump_records(records: Sequence[BaseModel]) -> str:
    """Compact JSON array of records, using their Zabbix field names."""
    items = ",".join(record.model_dump_json(by_alias=True) for record in records)
    return f"[{items}]"


def report_failure(failure: QueryFailure) -> None:
    """Write a query failure to stderr so it does not pollute the payload."""
    typer.echo(f"ERROR: {failure.message}", err=True)
