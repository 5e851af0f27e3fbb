import socket
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JOB_TYPES: dict[int, str] = {
    0: "Backup",
    1: "Replication",
    2: "File copy",
    24: "File to tape",
    28: "Backup to tape",
    51: "Backup copy",
    63: "Backup copy (immediate)",
    4030: "RMAN plug-in",
    12002: "Agent backup policy",
    12003: "Agent backup",
}

UNKNOWN_JOB_TYPE = "Unknown"


class Settings(BaseSettings):
    """Runtime settings from environment variables (prefixed with VBR_)."""

    model_config = SettingsConfigDict(
        env_prefix="VBR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # SQL Server hosting the Veeam configuration database
    sql_server: str = Field(default="localhost\\VEEAMSQL2016")
    sql_database: str = Field(default="VeeamBackup")
    sql_auth: Literal["integrated", "sql"] = Field(default="integrated")
    sql_username: str = Field(default="")
    sql_password: str = Field(default="")
    sql_driver: str = Field(default="ODBC Driver 17 for SQL Server")
    database_url: str = Field(default="")  # Full SQLAlchemy URL, overrides the sql_* fields
    connect_retry_delay: float = Field(default=2.0)

    # Host queried for repository information (CIM)
    host: str = Field(default_factory=socket.gethostname)
    powershell: str = Field(default="powershell.exe")

    # Zabbix sender (empty path = print to stdout)
    zabbix_sender: str = Field(default="")
    zabbix_server: str = Field(default="127.0.0.1")
    zabbix_port: int = Field(default=10051)
    zabbix_host: str = Field(default="")

    debug: bool = Field(default=False)


class JobTypeCatalog:
    """Fixed mapping of Veeam job type codes to labels."""

    def __init__(self, data: dict[Any, str] | None = None) -> None:
        source = data if data else DEFAULT_JOB_TYPES
        self._labels: dict[int, str] = {int(code): str(label) for code, label in source.items()}

    @property
    def codes(self) -> tuple[int, ...]:
        """Type codes considered supported, in ascending order."""
        return tuple(sorted(self._labels))

    def label(self, code: int) -> str:
        return self._labels.get(code, UNKNOWN_JOB_TYPE)

    def __contains__(self, code: object) -> bool:
        return code in self._labels

    def __len__(self) -> int:
        return len(self._labels)


class ZabbixConfig:
    """Zabbix item keys from config.yml and sender settings from environment."""

    def __init__(self, data: dict[str, Any], settings: Settings) -> None:
        self.key_prefix: str = data.get("key_prefix", "veeam")
        self.sender_path: str = settings.zabbix_sender
        self.server: str = settings.zabbix_server
        self.port: int = settings.zabbix_port
        self.host: str = settings.zabbix_host or settings.host

    def key(self, suffix: str) -> str:
        return f"{self.key_prefix}.{suffix}"


class AppConfig:
    """Combined configuration from .env and config.yml.

    Built once per run and passed explicitly to the components that need it.
    """

    def __init__(self, settings: Settings | None = None, config_path: Path | None = None) -> None:
        self.settings = settings or Settings()
        self._load_yaml(config_path or Path("config.yml"))

    def _load_yaml(self, config_path: Path) -> None:
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.job_types = JobTypeCatalog(data.get("job_types"))
        self.zabbix = ZabbixConfig(data.get("zabbix", {}), self.settings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig(get_settings())
