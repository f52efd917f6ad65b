"""SQLAlchemy models for listings and their media references."""
from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from estatemls.db.orm_registry import Base, utcnow
from estatemls.models.enums import PropertyStatus, enum_type


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    address = Column(Text, nullable=False)
    location = Column(Text, index=True)                     # city / area name
    property_type = Column(Text, index=True)                # house, apartment, land ...
    price = Column(Numeric(14, 2), nullable=False)
    status = Column(
        enum_type(PropertyStatus, "property_status"),
        nullable=False,
        default=PropertyStatus.DRAFT,
        index=True,
    )

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    agent_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    sold_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", foreign_keys=[owner_id])
    agent = relationship("User", foreign_keys=[agent_id])
    media = relationship(
        "PropertyMedia",
        back_populates="property",
        order_by="PropertyMedia.sort_order",
        cascade="all, delete-orphan",
    )
    purchases = relationship("Purchase", back_populates="property")

    @property
    def primary_media(self) -> "PropertyMedia | None":
        for m in self.media:
            if m.is_primary:
                return m
        return None


class PropertyMedia(Base):
    __tablename__ = "property_media"

    id = Column(Integer, primary_key=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False)
    file_path = Column(Text, nullable=False)                # blob storage reference
    media_type = Column(Text, nullable=False, default="image")
    is_primary = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    property = relationship("Property", back_populates="media")

    __table_args__ = (
        Index("ix_property_media_property_id", "property_id"),
        # at most one primary media item per property
        Index(
            "uq_property_media_primary",
            "property_id",
            unique=True,
            postgresql_where=(is_primary.is_(True)),
            sqlite_where=(is_primary.is_(True)),
        ),
    )
