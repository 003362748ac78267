"""Database URL helpers for settings classes that configure the DB in parts."""
from sqlalchemy.engine import URL


def get_database_url(
    driver: str,
    host: str,
    port: int,
    user: str,
    password: str,
    name: str,
) -> str:
    """
    Build a connection URL, escaping credentials.

    Example:
        >>> get_database_url("postgresql+asyncpg", "db", 5432, "ops", "p@ss", "it_ops")
        'postgresql+asyncpg://ops:p%40ss@db:5432/it_ops'
    """
    url = URL.create(
        drivername=driver,
        username=user or None,
        password=password or None,
        host=host,
        port=port,
        database=name,
    )
    return url.render_as_string(hide_password=False)
