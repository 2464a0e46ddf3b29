import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from rsvp_portal.config.database import create_engine
from rsvp_portal.config.settings import settings
from rsvp_portal.guests.repository import orm_models  # noqa: F401  registers the tables
from rsvp_portal.models.base import BaseModel

config = context.config

if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    # the app configures logging itself when it runs migrations on startup
    fileConfig(config.config_file_name)

target_metadata = BaseModel.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=settings.database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    engine = create_engine(settings.database_url)
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


def run_migrations_online() -> None:
    # A connection handed over through cfg.attributes (e.g. from a test setup) wins
    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
    else:
        asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
