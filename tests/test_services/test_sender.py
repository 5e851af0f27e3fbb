"""Tests for output sinks."""

import subprocess
from unittest.mock import MagicMock, patch

from vbrstatus.config import Settings, ZabbixConfig
from vbrstatus.services.sender import StdoutSink, ZabbixSenderSink, get_sink


def _zabbix_config(sender: str = "/usr/bin/zabbix_sender") -> ZabbixConfig:
    settings = Settings(
        zabbix_sender=sender,
        zabbix_server="zbx.example.org",
        zabbix_port=10052,
        zabbix_host="VBR01",
    )
    return ZabbixConfig({}, settings)


class TestStdoutSink:
    """Tests for StdoutSink."""

    def test_prints_value_only(self, capsys):
        assert StdoutSink().emit("veeam.jobs.total", "5") is True
        assert capsys.readouterr().out == "5\n"


class TestZabbixSenderSink:
    """Tests for ZabbixSenderSink."""

    def test_command(self):
        cmd = ZabbixSenderSink(_zabbix_config()).build_command("veeam.jobs.total", "5")
        assert cmd == [
            "/usr/bin/zabbix_sender",
            "-z",
            "zbx.example.org",
            "-p",
            "10052",
            "-s",
            "VBR01",
            "-k",
            "veeam.jobs.total",
            "-o",
            "5",
        ]

    def test_success(self):
        proc = MagicMock(returncode=0, stdout="processed: 1; failed: 0", stderr="")
        with patch("subprocess.run", return_value=proc):
            assert ZabbixSenderSink(_zabbix_config()).emit("veeam.jobs.total", "5") is True

    def test_failure(self):
        proc = MagicMock(returncode=2, stdout="processed: 0; failed: 1", stderr="")
        with patch("subprocess.run", return_value=proc):
            assert ZabbixSenderSink(_zabbix_config()).emit("veeam.jobs.total", "5") is False

    def test_timeout(self):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("zabbix_sender", 30)):
            assert ZabbixSenderSink(_zabbix_config()).emit("veeam.jobs.total", "5") is False


class TestGetSink:
    """Tests for get_sink."""

    def test_stdout_by_default(self):
        assert isinstance(get_sink(_zabbix_config(sender="")), StdoutSink)

    def test_sender_when_configured(self):
        assert isinstance(get_sink(_zabbix_config()), ZabbixSenderSink)
