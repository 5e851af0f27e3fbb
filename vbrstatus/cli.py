"""
vbrstatus CLI - Veeam Backup & Replication status for Zabbix.

Usage:
    vbrstatus RepoInfo     Repository capacity and health as a JSON array
    vbrstatus JobsInfo     Last status of every scheduled job as a JSON array
    vbrstatus TotalJob     Number of scheduled jobs

Meant to be called from a Zabbix agent UserParameter, e.g.:
    UserParameter=veeam.info[*],vbrstatus $1
"""

import typer

app = typer.Typer(
    name="vbrstatus",
    help="Veeam Backup & Replication status collector for Zabbix",
    add_completion=False,
)


@app.command()
def main(
    mode: str | None = typer.Argument(None, help="RepoInfo, JobsInfo or TotalJob"),
):
    """Collect one Veeam status item and write it to the configured output."""
    from vbrstatus.config import get_config
    from vbrstatus.core.logging import setup_logging
    from vbrstatus.jobs.dispatch import dispatch

    config = get_config()
    setup_logging(config.settings.debug)
    dispatch(mode, config)


if __name__ == "__main__":
    app()
