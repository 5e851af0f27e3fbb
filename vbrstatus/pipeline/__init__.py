from vbrstatus.pipeline.payloads import parse_job_options, parse_session_log
from vbrstatus.pipeline.reconcile import reconcile

__all__ = [
    "parse_job_options",
    "parse_session_log",
    "reconcile",
]
