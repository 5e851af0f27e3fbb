from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobSession(BaseModel):
    """One execution of a job, as read from the session history."""

    model_config = ConfigDict(frozen=True)

    job_id: str
    job_type: int
    job_name: str
    result: int | str
    is_retry: bool = False
    reason: str | None = None
    log_xml: str | None = None
    progress: int = 0
    creation_time: datetime | None = None
    end_time: datetime | None = None

    @field_validator("job_id", mode="before")
    @classmethod
    def _coerce_job_id(cls, value: Any) -> Any:
        # uniqueidentifier columns may come back as uuid.UUID
        return value if value is None else str(value)

    @field_validator("progress", "is_retry", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any) -> Any:
        return 0 if value is None else value


class ConfiguredJob(BaseModel):
    """A job definition that is enabled in the scheduler."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: int
    schedule_enabled: bool = True
    options: str | None = None  # raw JobOptionsRoot XML


class JobOptions(BaseModel):
    """Validated subset of a job's options payload."""

    run_manually: bool


class SessionLogEntry(BaseModel):
    """One entry of a session's log payload."""

    status: str
    title: str

    @property
    def is_failure(self) -> bool:
        return self.status.lower() == "failed"


class JobStatusRecord(BaseModel):
    """Last known status of a job, serialized with the Zabbix macro names."""

    job_id: str = Field(serialization_alias="JOBID")
    job_type_id: int = Field(serialization_alias="JOBTYPEID")
    job_type_name: str = Field(serialization_alias="JOBTYPENAME")
    job_name: str = Field(serialization_alias="JOBNAME")
    result: int | str = Field(serialization_alias="JOBRESULT")
    retry: bool = Field(serialization_alias="JOBRETRY")
    reason: str = Field(serialization_alias="JOBREASON")
    progress: int = Field(serialization_alias="JOBPERCENT")
    start: int = Field(serialization_alias="JOBSTART")
    end: int = Field(serialization_alias="JOBEND")
