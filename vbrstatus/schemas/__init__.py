from vbrstatus.schemas.job import (
    ConfiguredJob,
    JobOptions,
    JobSession,
    JobStatusRecord,
    SessionLogEntry,
)
from vbrstatus.schemas.repository import RawRepository, RepositoryRecord

__all__ = [
    "ConfiguredJob",
    "JobOptions",
    "JobSession",
    "JobStatusRecord",
    "SessionLogEntry",
    "RawRepository",
    "RepositoryRecord",
]
