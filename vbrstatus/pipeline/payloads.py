"""
Parsing of the XML payloads Veeam stores alongside jobs and sessions.

Both payloads are validated here so the reconciler only sees typed values:

- BJobs.options: ``<JobOptionsRoot><RunManually>False</RunManually>...``
- JobSessions.log_xml: ``<Root><Log Status="Failed" Title="..." />...</Root>``
"""

from xml.etree.ElementTree import Element, ParseError, fromstring

from vbrstatus.core.errors import PayloadError
from vbrstatus.schemas.job import JobOptions, SessionLogEntry

_TRUE = {"true", "1"}
_FALSE = {"false", "0"}


def _parse_xml(text: str, kind: str) -> Element:
    try:
        return fromstring(text)
    except ParseError as e:
        raise PayloadError(kind, str(e)) from e


def parse_job_options(options_xml: str | None) -> JobOptions:
    """Parse a job's options payload.

    Raises:
        PayloadError: the payload is absent, not XML, or has no valid RunManually flag
    """
    if not options_xml or not options_xml.strip():
        raise PayloadError("options", "payload is empty")

    root = _parse_xml(options_xml, "options")
    node = root if root.tag == "RunManually" else root.find(".//RunManually")
    if node is None:
        raise PayloadError("options", "RunManually element missing")

    value = (node.text or "").strip().lower()
    if value in _TRUE:
        return JobOptions(run_manually=True)
    if value in _FALSE:
        return JobOptions(run_manually=False)
    raise PayloadError("options", f"RunManually has unexpected value {node.text!r}")


def parse_session_log(log_xml: str | None) -> list[SessionLogEntry]:
    """Parse a session's log payload into entries, in document order.

    A session without a log has no entries.

    Raises:
        PayloadError: the payload is not XML
    """
    if not log_xml or not log_xml.strip():
        return []

    root = _parse_xml(log_xml, "log")
    return [
        SessionLogEntry(
            status=node.get("Status", ""),
            title=node.get("Title", ""),
        )
        for node in root.iter("Log")
    ]


def failure_titles(entries: list[SessionLogEntry]) -> list[str]:
    """Titles of failed log entries, in document order."""
    return [entry.title for entry in entries if entry.is_failure]
