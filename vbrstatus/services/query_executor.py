"""
Read-only query execution against the Veeam configuration database.

Failures never escape as exceptions: ``execute`` returns either a
``QuerySuccess`` carrying the rows or a ``QueryFailure`` carrying a message,
and the caller treats the latter as "no data".
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Connection, Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.expression import Executable

from vbrstatus.core.errors import ConnectionFailedError
from vbrstatus.core.logging import get_logger
from vbrstatus.core.retry import RetryConfig, retry_call

logger = get_logger(__name__)


@dataclass(frozen=True)
class QuerySuccess:
    """All rows returned by a query, as column-name mappings."""

    rows: list[dict[str, Any]] = field(default_factory=list)

    def scalar(self) -> Any:
        """First column of the first row, or None for an empty result."""
        if not self.rows:
            return None
        return next(iter(self.rows[0].values()), None)


@dataclass(frozen=True)
class QueryFailure:
    """Human-readable reason a query produced no data."""

    message: str


QueryResult = QuerySuccess | QueryFailure


class QueryExecutor:
    """Open a connection, run one statement, release the connection."""

    def __init__(
        self,
        engine: Engine,
        retry: RetryConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.engine = engine
        self.retry = retry or RetryConfig(max_attempts=2, retryable_exceptions=(SQLAlchemyError,))
        self._sleep = sleep

    def _connect(self) -> Connection:
        try:
            return retry_call(
                self.engine.connect,
                config=self.retry,
                operation_name="database_connect",
                sleep=self._sleep,
            )
        except SQLAlchemyError as e:
            raise ConnectionFailedError(str(e)) from e

    def _release(self, conn: Connection | None) -> None:
        if conn is None:
            return
        try:
            conn.close()
        except Exception as e:
            logger.bind(error=str(e)).debug("database_release_failed")

    def execute(self, query: str | Executable) -> QueryResult:
        """
        Run a read-only statement and fetch the whole result.

        No statement timeout is applied so large session tables are read in full.

        Args:
            query: SQL text or a SQLAlchemy selectable

        Returns:
            QuerySuccess with every row, or QueryFailure describing what went wrong
        """
        statement = text(query) if isinstance(query, str) else query
        conn: Connection | None = None
        try:
            conn = self._connect()
            result = conn.execute(statement)
            rows = [dict(row) for row in result.mappings().all()]
            logger.bind(rows=len(rows)).debug("database_query_completed")
            return QuerySuccess(rows=rows)
        except ConnectionFailedError as e:
            message = f"Unable to connect to the Veeam database: {e}"
            logger.bind(error=str(e)).error("database_connect_failed")
            return QueryFailure(message=message)
        except SQLAlchemyError as e:
            message = f"Query against the Veeam database failed: {e}"
            logger.bind(error=str(e)).error("database_query_failed")
            return QueryFailure(message=message)
        finally:
            self._release(conn)
