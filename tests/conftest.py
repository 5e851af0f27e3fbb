"""
Pytest configuration and fixtures for vbrstatus tests.

Provides:
- In-memory SQLite database with the Veeam tables
- Application config that never reads the environment's config.yml
- Factory fixtures for sessions, jobs and XML payloads
"""

import uuid
from datetime import datetime
from xml.sax.saxutils import quoteattr

import pytest
from sqlalchemy import StaticPool, create_engine

from vbrstatus.config import AppConfig, Settings
from vbrstatus.models import Base, BJobRow, JobSessionRow
from vbrstatus.services.query_executor import QueryExecutor
from vbrstatus.services.sender import OutputSink

TEST_DATABASE_URL = "sqlite:///:memory:"


class RecordingSink(OutputSink):
    """Sink that keeps emitted values for assertions."""

    name = "recording"

    def __init__(self) -> None:
        self.values: list[tuple[str, str]] = []

    def emit(self, key: str, value: str) -> bool:
        self.values.append((key, value))
        return True


def options_xml(run_manually: bool = False) -> str:
    """Options payload as stored in BJobs.options."""
    return (
        "<JobOptionsRoot>"
        f"<RunManually>{'True' if run_manually else 'False'}</RunManually>"
        "<Compression>5</Compression>"
        "</JobOptionsRoot>"
    )


def log_xml(*entries: tuple[str, str]) -> str:
    """Log payload with (status, title) entries."""
    logs = "".join(
        f"<Log Usn={quoteattr(str(i))} Status={quoteattr(status)} Title={quoteattr(title)} />"
        for i, (status, title) in enumerate(entries)
    )
    return f'<Root TotalUsn="{len(entries)}">{logs}</Root>'


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url=TEST_DATABASE_URL,
        host="vbr01",
        zabbix_sender="",
        connect_retry_delay=0,
        debug=True,
    )


@pytest.fixture
def app_config(settings: Settings, tmp_path) -> AppConfig:
    return AppConfig(settings, config_path=tmp_path / "config.yml")


@pytest.fixture
def db_engine():
    """In-memory database shared by every connection of the test."""
    engine = create_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def executor(db_engine) -> QueryExecutor:
    return QueryExecutor(db_engine, sleep=lambda _: None)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def add_job(db_engine):
    """Insert a BJobs row."""

    def _add(
        name: str,
        job_type: int = 0,
        schedule_enabled: bool = True,
        run_manually: bool = False,
        options: str | None = None,
    ) -> None:
        with db_engine.begin() as conn:
            conn.execute(
                BJobRow.__table__.insert().values(
                    id=str(uuid.uuid4()),
                    name=name,
                    type=job_type,
                    schedule_enabled=schedule_enabled,
                    options=options if options is not None else options_xml(run_manually),
                )
            )

    return _add


@pytest.fixture
def add_session(db_engine):
    """Insert a [Backup.Model.JobSessions] row."""

    def _add(
        job_name: str,
        creation_time: datetime | None,
        end_time: datetime | None = None,
        result: int = 0,
        job_type: int = 0,
        reason: str | None = "",
        log: str | None = None,
        is_retry: bool = False,
        progress: int = 100,
        job_id: str | None = None,
        session_id: str | None = None,
    ) -> None:
        with db_engine.begin() as conn:
            conn.execute(
                JobSessionRow.__table__.insert().values(
                    id=session_id or str(uuid.uuid4()),
                    job_id=job_id or str(uuid.uuid5(uuid.NAMESPACE_DNS, job_name)),
                    job_type=job_type,
                    job_name=job_name,
                    result=result,
                    is_retry=is_retry,
                    reason=reason,
                    log_xml=log if log is not None else log_xml(),
                    progress=progress,
                    creation_time=creation_time,
                    end_time=end_time,
                )
            )

    return _add
