# backend/estatemls/schemas/inquiry.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from estatemls.models.enums import ContactMethod, InquiryStatus
from estatemls.schemas.common import ApiModel


class InquiryOut(ApiModel):
    id: int
    property_id: int
    user_id: Optional[int] = None
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    preferred_contact_method: Optional[ContactMethod] = None
    viewing_request_date: Optional[datetime] = None
    status: InquiryStatus
    agent_notes: Optional[str] = None
    created_at: datetime


class InquiryCreate(ApiModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    message: str = Field(min_length=1)
    phone: Optional[str] = None
    preferred_contact_method: Optional[ContactMethod] = None
    viewing_request_date: Optional[datetime] = None


class InquiryUpdate(ApiModel):
    status: Optional[InquiryStatus] = None
    agent_notes: Optional[str] = None
