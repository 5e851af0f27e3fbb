"""
Repository information from the Veeam CIM provider.

Repositories are read from the ``Repository`` class of the ``ROOT\\VeeamBS``
namespace through PowerShell, then shaped into RepositoryRecords.
"""

import html
import json
import subprocess
from collections.abc import Iterable
from typing import Any

from vbrstatus.core.logging import get_logger
from vbrstatus.schemas.repository import RawRepository, RepositoryRecord
from vbrstatus.services.query_executor import QueryFailure, QueryResult, QuerySuccess

logger = get_logger(__name__)

CIM_NAMESPACE = "ROOT\\VeeamBS"
CIM_CLASS = "Repository"
CIM_PROPERTIES = ("Name", "Capacity", "FreeSpace", "OutOfDate")


def _ps_quote(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string."""
    return "'" + value.replace("'", "''") + "'"


def build_repository_command(powershell: str, host: str) -> list[str]:
    """Command line querying the repositories of a Veeam server."""
    script = (
        f"Get-CimInstance -Namespace {_ps_quote(CIM_NAMESPACE)} -ClassName {CIM_CLASS} "
        f"-ComputerName {_ps_quote(host)} | "
        f"Select-Object {','.join(CIM_PROPERTIES)} | ConvertTo-Json -Compress"
    )
    return [powershell, "-NoProfile", "-NonInteractive", "-Command", script]


class RepositoryClient:
    """Runs the CIM query and returns the raw repository instances."""

    def __init__(self, powershell: str = "powershell.exe", timeout: float = 120) -> None:
        self.powershell = powershell
        self.timeout = timeout

    def fetch(self, host: str) -> QueryResult:
        """
        Query the repositories of a host.

        Returns:
            QuerySuccess with one mapping per repository, or QueryFailure
        """
        cmd = build_repository_command(self.powershell, host)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            logger.bind(host=host, timeout=self.timeout).error("repository_query_timeout")
            return QueryFailure(message=f"Repository query on {host} timed out")
        except OSError as e:
            logger.bind(host=host, error=str(e)).error("repository_query_failed")
            return QueryFailure(message=f"Unable to run {self.powershell}: {e}")

        if proc.returncode != 0:
            error = proc.stderr.strip()
            logger.bind(host=host, returncode=proc.returncode, error=error).error(
                "repository_query_failed"
            )
            return QueryFailure(message=f"Repository query on {host} failed: {error}")

        return self._parse_output(proc.stdout, host)

    @staticmethod
    def _parse_output(output: str, host: str) -> QueryResult:
        if not output.strip():
            return QuerySuccess(rows=[])
        try:
            data: Any = json.loads(output)
        except json.JSONDecodeError as e:
            logger.bind(host=host, error=str(e)).error("repository_output_invalid")
            return QueryFailure(message=f"Repository query on {host} returned invalid JSON")

        # ConvertTo-Json emits a bare object when there is a single repository
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            logger.bind(host=host).error("repository_output_invalid")
            return QueryFailure(message=f"Repository query on {host} returned unexpected data")
        return QuerySuccess(rows=data)


def format_repositories(
    raw_records: Iterable[dict[str, Any] | RawRepository],
) -> list[RepositoryRecord]:
    """Map raw repository instances to records, escaping the name.

    Raises:
        ValidationError: a raw record has no name or non-numeric sizes
    """
    records = []
    for raw in raw_records:
        repo = raw if isinstance(raw, RawRepository) else RawRepository.model_validate(raw)
        records.append(
            RepositoryRecord(
                name=html.escape(repo.name),
                capacity=repo.capacity,
                free=repo.free_space,
                out_of_date=repo.out_of_date,
            )
        )
    return records

