from vbrstatus.models.base import Base
from vbrstatus.models.job import BJobRow
from vbrstatus.models.job_session import JobSessionRow

__all__ = [
    "Base",
    "BJobRow",
    "JobSessionRow",
]
