"""
RepoInfo: capacity and health of the backup repositories.

Reads the Repository instances of the Veeam CIM provider on the configured
host and emits them as a JSON array. A failed query emits an empty array.
"""

from pydantic import ValidationError

from vbrstatus.config import AppConfig
from vbrstatus.core.logging import get_logger
from vbrstatus.jobs.utils import dump_records, report_failure
from vbrstatus.schemas.repository import RepositoryRecord
from vbrstatus.services.query_executor import QueryFailure
from vbrstatus.services.repository_service import RepositoryClient, format_repositories
from vbrstatus.services.sender import OutputSink

logger = get_logger(__name__)


def collect_repositories(client: RepositoryClient, host: str) -> list[RepositoryRecord]:
    """Repository records for a host; empty when the CIM query fails."""
    result = client.fetch(host)
    if isinstance(result, QueryFailure):
        report_failure(result)
        return []

    try:
        return format_repositories(result.rows)
    except ValidationError as e:
        logger.bind(host=host, error=str(e)).error("repository_output_invalid")
        return []


def main(config: AppConfig, client: RepositoryClient, sink: OutputSink) -> None:
    """Run the RepoInfo collection."""
    records = collect_repositories(client, config.settings.host)
    sink.emit(config.zabbix.key("repo.info"), dump_records(records))
    logger.bind(repositories=len(records)).info("repo_info_completed")
