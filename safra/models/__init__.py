"""ORM model registry — importing this module registers every table on Base.metadata.

Alembic ``env.py`` imports ``Base`` from here (not from ``base.py``) so that
autogenerate sees all tables.  Application code can also do::

    from safra.models import Production, Property, User
"""

# ── Base & Mixins ───────────────────────────────────────────────────────────
from safra.models.base import (
    Base,
    SerialPrimaryKeyMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)

# ── Production records ──────────────────────────────────────────────────────
from safra.models.production import Production, Property

# ── Accounts ────────────────────────────────────────────────────────────────
from safra.models.user import User

__all__ = [
    # Base & mixins
    "Base",
    # Production records
    "Production",
    "Property",
    "SerialPrimaryKeyMixin",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    # Accounts
    "User",
]
