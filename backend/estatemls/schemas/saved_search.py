# backend/estatemls/schemas/saved_search.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from estatemls.models.enums import PropertyStatus
from estatemls.schemas.common import ApiModel, Money


class SearchParams(ApiModel):
    """The same filters ``GET /api/properties`` accepts."""
    status: Optional[PropertyStatus] = None
    property_type: Optional[str] = None
    location: Optional[str] = None
    min_price: Optional[Money] = None
    max_price: Optional[Money] = None


class SavedSearchOut(ApiModel):
    id: int
    name: str
    search_params: SearchParams
    notifications_enabled: bool
    created_at: datetime


class SavedSearchCreate(ApiModel):
    name: str = Field(min_length=1, max_length=100)
    search_params: SearchParams = SearchParams()
    notifications_enabled: bool = False


class SavedSearchUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    search_params: Optional[SearchParams] = None
    notifications_enabled: Optional[bool] = None
