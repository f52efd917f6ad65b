# backend/estatemls/db/orm_registry.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING
from sqlalchemy.orm import declarative_base

# single Base shared by every ORM model
Base = declarative_base()


def utcnow() -> datetime:
    # python-side default so ORM inserts share the application clock
    return datetime.now(timezone.utc)

# type-checker hints only; not executed at runtime (avoids import cycles)
if TYPE_CHECKING:  # pragma: no cover
    from estatemls.models.user import User              # noqa: F401
    from estatemls.models.property import Property      # noqa: F401
    from estatemls.models.purchase import Purchase      # noqa: F401
    from estatemls.models.payment import Payment        # noqa: F401

def import_all_models() -> None:
    """
    Load every model module so its mapper is registered on ``Base.metadata``.
    - called at app startup and from the Alembic env.
    - imports are deferred here to avoid circular imports.
    """
    import importlib

    for mod in (
        "estatemls.models.user",
        "estatemls.models.property",
        "estatemls.models.purchase",
        "estatemls.models.payment",
        "estatemls.models.notification",
        "estatemls.models.favorite",
        "estatemls.models.agent_profile",
        "estatemls.models.inquiry",
        "estatemls.models.saved_search",
    ):
        importlib.import_module(mod)

__all__ = ["Base", "import_all_models", "utcnow"]
