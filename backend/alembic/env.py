from logging.config import fileConfig
from alembic import context
import os, sys
from sqlalchemy import create_engine
from sqlalchemy import pool

# make `estatemls` importable when alembic runs from backend/ or the repo root
here = os.path.abspath(os.path.dirname(__file__))
backend_dir   = os.path.abspath(os.path.join(here, ".."))      # .../backend
project_root  = os.path.abspath(os.path.join(here, "../.."))   # .../repo
for p in (backend_dir, project_root):
    if p not in sys.path:
        sys.path.append(p)

# model metadata
from estatemls.core.settings import settings
from estatemls.db.orm_registry import Base, import_all_models

import_all_models()

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    url = settings.SYNC_DATABASE_URL
    if not url:
        raise RuntimeError("SYNC_DATABASE_URL not set")
    return url


def run_migrations_offline():
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_engine(_database_url(), poolclass=pool.NullPool, future=True)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
