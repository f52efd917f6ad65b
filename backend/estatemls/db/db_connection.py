# backend/estatemls/db/db_connection.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from estatemls.core.settings import settings

SYNC_DATABASE_URL = settings.SYNC_DATABASE_URL  # sync (web/scripts/alembic)

if not SYNC_DATABASE_URL:
    raise RuntimeError("SYNC_DATABASE_URL is not set. Check your .env.")

_connect_args = {}
if SYNC_DATABASE_URL.startswith("sqlite"):
    # TestClient / uvicorn worker threads share the connection
    _connect_args["check_same_thread"] = False

sync_engine = create_engine(
    SYNC_DATABASE_URL,
    echo=False,
    future=True,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

# pin search_path on connect (postgres only)
if sync_engine.dialect.name == "postgresql":
    @event.listens_for(sync_engine, "connect")
    def _set_search_path_sync(dbapi_conn, conn_record):
        with dbapi_conn.cursor() as cur:
            cur.execute("SET search_path TO public")

SessionLocal = sessionmaker(bind=sync_engine, autocommit=False, autoflush=False, expire_on_commit=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
