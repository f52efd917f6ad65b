# backend/estatemls/db/__init__.py
from .db_connection import SessionLocal, get_db, sync_engine
from .orm_registry import Base, import_all_models

def init_db() -> None:
    # register mappers; schema itself is owned by alembic
    import_all_models()

def close_db() -> None:
    # release pooled connections on shutdown
    sync_engine.dispose()

__all__ = ["Base", "SessionLocal", "get_db", "init_db", "close_db", "import_all_models"]
