"""Veeam Backup & Replication status collector for Zabbix."""

__version__ = "1.0.0"
