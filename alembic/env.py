"""
Alembic environment for the book catalog schema.

The database URL comes from DATABASE_URL through the application
settings; the value in alembic.ini is only a placeholder.

    alembic upgrade head               # migrate the configured database
    alembic upgrade head --sql         # print the SQL instead
    alembic revision --autogenerate -m "add column"
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context
from bookcatalog.config import get_settings
from bookcatalog.database import Base

# Registers authors, books, book_genres and users on Base.metadata
import bookcatalog.models  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", get_settings().database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure_options(url: str) -> dict:
    """Options shared by offline and online runs."""
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        # SQLite cannot ALTER constraints in place; batch mode recreates the table
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout without a database connection."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a single unpooled connection."""
    url = config.get_main_option("sqlalchemy.url")
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with engine.connect() as connection:
        context.configure(connection=connection, **_configure_options(url))

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
