"""Tests for database connection building."""

from sqlalchemy.pool import NullPool

from vbrstatus.config import Settings
from vbrstatus.core.database import build_connection_url, create_db_engine


class TestBuildConnectionUrl:
    """Tests for build_connection_url."""

    def test_integrated_auth(self):
        """Integrated auth uses a trusted connection without credentials."""
        url = build_connection_url(
            Settings(sql_server="sql01\\VEEAMSQL", sql_database="VeeamBackup", sql_auth="integrated")
        )
        assert url.drivername == "mssql+pyodbc"
        assert url.host == "sql01\\VEEAMSQL"
        assert url.database == "VeeamBackup"
        assert url.username is None
        assert url.query["Trusted_Connection"] == "yes"
        assert url.query["driver"] == "ODBC Driver 17 for SQL Server"

    def test_sql_auth(self):
        """SQL auth passes username and password."""
        url = build_connection_url(
            Settings(sql_auth="sql", sql_username="zabbix", sql_password="s3cret")
        )
        assert url.username == "zabbix"
        assert url.password == "s3cret"
        assert "Trusted_Connection" not in url.query

    def test_database_url_override(self):
        url = build_connection_url(Settings(database_url="sqlite:///:memory:"))
        assert url.drivername == "sqlite"


class TestCreateDbEngine:
    """Tests for create_db_engine."""

    def test_no_pooling(self):
        engine = create_db_engine(Settings(database_url="sqlite:///:memory:"))
        try:
            assert isinstance(engine.pool, NullPool)
        finally:
            engine.dispose()
