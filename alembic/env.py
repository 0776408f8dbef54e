"""
Alembic migration environment for the users schema.

The URL comes from, in order: ``alembic -x db_url=...``, ``sqlalchemy.url``
in alembic.ini, then DATABASE_URL from app settings with the async driver
swapped for a sync one.
"""
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import make_url

from alembic import context

config = context.config

# Keep already-configured app loggers alive (tests capture them)
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

from app.core.config import get_settings  # noqa: E402
from app.db.database import Base  # noqa: E402
import app.models  # noqa: E402, F401


def _resolve_url() -> str:
    cmd_line_url = context.get_x_argument(as_dictionary=True).get("db_url")
    return (
        cmd_line_url
        or config.get_main_option("sqlalchemy.url")
        or get_settings().sync_database_url
    )


def _configure(url: str, **kwargs) -> None:
    # SQLite cannot ALTER most things in place; batch mode rebuilds the table
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=make_url(url).get_backend_name() == "sqlite",
        **kwargs,
    )


def run_migrations_offline(url: str) -> None:
    """Emit the migration SQL without connecting."""
    _configure(url, url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    """Apply migrations over a single, unpooled connection."""
    connectable = engine_from_config(
        {"sqlalchemy.url": url},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        _configure(url, connection=connection)
        with context.begin_transaction():
            context.run_migrations()


database_url = _resolve_url()
config.set_main_option("sqlalchemy.url", database_url)

if context.is_offline_mode():
    run_migrations_offline(database_url)
else:
    run_migrations_online(database_url)
