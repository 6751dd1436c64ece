import os
import urllib.parse
import warnings

from sqlalchemy import create_engine, event

from .core.config import PROJECT_ROOT, load_env


def _enable_sqlite_foreign_keys(engine):
    """SQLite ignores FOREIGN KEY clauses unless the pragma is set per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _build_engine(url: str):
    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})
        _enable_sqlite_foreign_keys(engine)
        return engine
    return create_engine(url, pool_pre_ping=True)


def get_engine(database_url: str | None = None):
    """Return a SQLAlchemy Engine.

    Resolution order:
      1. `database_url` argument
      2. `DATABASE_URL` environment variable (recommended for production)
      3. Individual env vars: `DB_USER`, `DB_PASSWORD`, `DB_HOST`, `DB_PORT`, `DB_NAME`
      4. Fallback to local SQLite file `data/library.db` (development convenience)
    """
    if database_url:
        return _build_engine(database_url)

    # Load .env into environment (if present)
    load_env()

    database_url = os.environ.get("DATABASE_URL")
    if database_url:
        return _build_engine(database_url)

    # Check explicit DB env vars
    user = os.environ.get("DB_USER")
    password = os.environ.get("DB_PASSWORD")
    host = os.environ.get("DB_HOST")
    port = os.environ.get("DB_PORT")
    dbname = os.environ.get("DB_NAME")

    if user and dbname and host:
        pwd = urllib.parse.quote_plus(password) if password else ""
        port_part = f":{port}" if port else ""
        conn = f"mysql+pymysql://{user}:{pwd}@{host}{port_part}/{dbname}"
        return _build_engine(conn)

    db_dir = os.path.join(PROJECT_ROOT, "data")
    os.makedirs(db_dir, exist_ok=True)
    db_path = os.path.join(db_dir, "library.db")
    warnings.warn(
        "DATABASE_URL not set and DB env vars not found, falling back to local sqlite at: %s" % db_path
    )
    return _build_engine(f"sqlite:///{db_path}")
