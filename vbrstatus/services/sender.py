"""Output channels for the values collected from Veeam."""

import subprocess
from abc import ABC, abstractmethod

import typer

from vbrstatus.config import ZabbixConfig
from vbrstatus.core.logging import get_logger

logger = get_logger(__name__)


class OutputSink(ABC):
    """Destination of a collected value."""

    name: str = "unknown"

    @abstractmethod
    def emit(self, key: str, value: str) -> bool:
        """
        Deliver one value.

        Args:
            key: Zabbix item key the value belongs to
            value: Serialized value (JSON array or integer)

        Returns:
            True if the value was delivered
        """


class StdoutSink(OutputSink):
    """Print the value, for Zabbix agent UserParameters."""

    name = "stdout"

    def emit(self, key: str, value: str) -> bool:
        typer.echo(value)
        return True


class ZabbixSenderSink(OutputSink):
    """Push the value to a Zabbix server or proxy with zabbix_sender."""

    name = "zabbix_sender"

    def __init__(self, config: ZabbixConfig, timeout: float = 30) -> None:
        self.config = config
        self.timeout = timeout

    def build_command(self, key: str, value: str) -> list[str]:
        return [
            self.config.sender_path,
            "-z",
            self.config.server,
            "-p",
            str(self.config.port),
            "-s",
            self.config.host,
            "-k",
            key,
            "-o",
            value,
        ]

    def emit(self, key: str, value: str) -> bool:
        cmd = self.build_command(key, value)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            logger.bind(key=key, timeout=self.timeout).error("zabbix_sender_timeout")
            return False
        except OSError as e:
            logger.bind(key=key, error=str(e)).error("zabbix_sender_error")
            return False

        if proc.returncode != 0:
            logger.bind(
                key=key,
                returncode=proc.returncode,
                output=(proc.stdout or proc.stderr).strip(),
            ).error("zabbix_sender_failed")
            return False

        logger.bind(key=key).debug("zabbix_value_sent")
        return True


def get_sink(config: ZabbixConfig) -> OutputSink:
    """zabbix_sender when a sender path is configured, stdout otherwise."""
    if config.sender_path:
        return ZabbixSenderSink(config)
    return StdoutSink()
