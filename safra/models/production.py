"""Property and Production ORM models.

Properties are maintained by another service; this API only resolves them by
their unique ``name`` when a production record is written.  A production row
always points at exactly one property (``ON DELETE RESTRICT``).
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from safra.models.base import Base, SerialPrimaryKeyMixin, TimestampMixin

# ═══════════════════════════════════════════════════════════════════════════
# Property
# ═══════════════════════════════════════════════════════════════════════════


class Property(Base, SerialPrimaryKeyMixin, TimestampMixin):
    """A farm property, addressed by its unique name."""

    __tablename__ = "properties"

    name: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<Property id={self.id} name={self.name!r}>"


# ═══════════════════════════════════════════════════════════════════════════
# Production
# ═══════════════════════════════════════════════════════════════════════════


class Production(Base, SerialPrimaryKeyMixin, TimestampMixin):
    """One harvest-season production record for a property.

    ``production_area`` and ``cultivated_area`` are measured in hectares;
    ``cultivated_area`` is optional.
    """

    __tablename__ = "productions"
    __table_args__ = (Index("ix_productions_property_id", "property_id"),)

    harvest_season: Mapped[str] = mapped_column(String(64), nullable=False)
    production_area: Mapped[float] = mapped_column(Float, nullable=False)
    cultivated_area: Mapped[float | None] = mapped_column(Float, nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    crop: Mapped[str] = mapped_column(String(100), nullable=False)
    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="RESTRICT"),
        nullable=False,
    )

    # ── Relationships ────────────────────────────────────────────────────
    property: Mapped[Property] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<Production id={self.id} safra={self.harvest_season!r} "
            f"property={self.property_id}>"
        )
