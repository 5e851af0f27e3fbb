from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import NullPool

from vbrstatus.config import Settings
from vbrstatus.core.logging import get_logger

logger = get_logger(__name__)


def build_connection_url(settings: Settings) -> URL:
    """
    Build the SQLAlchemy URL for the Veeam configuration database.

    - VBR_DATABASE_URL, when set, is used as-is
    - integrated auth: Windows account of the running process (Trusted_Connection)
    - sql auth: username/password from settings
    """
    if settings.database_url:
        return make_url(settings.database_url)

    query = {"driver": settings.sql_driver}
    if settings.sql_auth == "integrated":
        query["Trusted_Connection"] = "yes"
        username = password = None
    else:
        username = settings.sql_username or None
        password = settings.sql_password or None

    return URL.create(
        "mssql+pyodbc",
        username=username,
        password=password,
        host=settings.sql_server,
        database=settings.sql_database,
        query=query,
    )


def create_db_engine(settings: Settings) -> Engine:
    """Create an engine without pooling: every released connection is closed."""
    url = build_connection_url(settings)
    logger.bind(
        host=url.host,
        database=url.database,
        auth=settings.sql_auth,
    ).debug("database_engine_created")
    return create_engine(
        url,
        echo=settings.debug,
        poolclass=NullPool,
    )
