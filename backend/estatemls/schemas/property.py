# backend/estatemls/schemas/property.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from estatemls.models.enums import PropertyStatus
from estatemls.schemas.common import ApiModel, Money


class MediaOut(ApiModel):
    id: int
    file_path: str
    media_type: str
    is_primary: bool
    sort_order: int


class MediaCreate(ApiModel):
    file_path: str
    media_type: str = "image"
    is_primary: bool = False
    sort_order: int = 0


class PropertyBrief(ApiModel):
    id: int
    title: str
    address: str
    price: Money
    status: PropertyStatus


class PropertyCard(PropertyBrief):
    primary_media: Optional[MediaOut] = None


class PropertyOut(PropertyCard):
    description: Optional[str] = None
    location: Optional[str] = None
    property_type: Optional[str] = None
    owner_id: int
    agent_id: Optional[int] = None
    sold_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    media: List[MediaOut] = []


class PropertyCreate(ApiModel):
    title: str
    address: str
    price: Money
    description: Optional[str] = None
    location: Optional[str] = None
    property_type: Optional[str] = None
    agent_id: Optional[int] = None


class PropertyUpdate(ApiModel):
    title: Optional[str] = None
    address: Optional[str] = None
    price: Optional[Money] = None
    description: Optional[str] = None
    location: Optional[str] = None
    property_type: Optional[str] = None
    agent_id: Optional[int] = None
    status: Optional[PropertyStatus] = None


class PropertyList(ApiModel):
    properties: List[PropertyCard]
