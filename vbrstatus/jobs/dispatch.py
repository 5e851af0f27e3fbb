"""
Mode dispatch: runs one of the collections selected on the command line.

Modes:
  RepoInfo   Repository capacity and health (CIM)
  JobsInfo   Last status of every scheduled job (SQL)
  TotalJob   Number of scheduled jobs (SQL)

Each mode that needs the database builds its own executor, so no connection
is shared between modes.
"""

import typer

from vbrstatus.config import AppConfig
from vbrstatus.core.logging import get_logger
from vbrstatus.jobs import jobs_info, repo_info, total_job
from vbrstatus.jobs.utils import build_executor
from vbrstatus.services.query_executor import QueryExecutor
from vbrstatus.services.repository_service import RepositoryClient
from vbrstatus.services.sender import OutputSink, get_sink

logger = get_logger(__name__)

REPO_INFO = "RepoInfo"
JOBS_INFO = "JobsInfo"
TOTAL_JOB = "TotalJob"

MODES = (REPO_INFO, JOBS_INFO, TOTAL_JOB)

USAGE = f"Usage: vbrstatus <{'|'.join(MODES)}>"


def dispatch(
    mode: str | None,
    config: AppConfig,
    sink: OutputSink | None = None,
    executor: QueryExecutor | None = None,
    repository_client: RepositoryClient | None = None,
) -> None:
    """
    Run the collection for a mode.

    An unknown or missing mode prints the usage message and queries nothing.

    Args:
        mode: One of MODES
        config: Application configuration
        sink: Output channel, defaults to the one configured
        executor: Database executor, built from settings when omitted
        repository_client: CIM client, built from settings when omitted
    """
    if mode not in MODES:
        logger.bind(mode=mode).debug("unknown_mode")
        typer.echo(USAGE)
        return

    sink = sink or get_sink(config.zabbix)
    logger.bind(mode=mode, sink=sink.name).debug("dispatch_started")

    if mode == REPO_INFO:
        client = repository_client or RepositoryClient(powershell=config.settings.powershell)
        repo_info.main(config, client, sink)
    elif mode == JOBS_INFO:
        jobs_info.main(config, executor or build_executor(config.settings), sink)
    else:
        total_job.main(config, executor or build_executor(config.settings), sink)
