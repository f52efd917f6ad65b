# backend/estatemls/api/properties.py
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from estatemls.api.deps import get_current_user, get_optional_user
from estatemls.db.db_connection import get_db
from estatemls.models.enums import InquiryStatus, PropertyStatus
from estatemls.models.user import User
from estatemls.schemas.inquiry import InquiryCreate, InquiryOut, InquiryUpdate
from estatemls.schemas.property import (
    MediaCreate,
    MediaOut,
    PropertyCreate,
    PropertyList,
    PropertyOut,
    PropertyUpdate,
)
from estatemls.services import inquiries, properties

router = APIRouter(prefix="/api/properties", tags=["properties"])


# ───────────────────────────────
# GET /api/properties
# ───────────────────────────────
@router.get("", response_model=PropertyList)
def list_properties(
    status: Optional[PropertyStatus] = Query(None),
    property_type: Optional[str] = Query(None, alias="propertyType"),
    location: Optional[str] = Query(None),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """
    Public listing search.
    - every filter is optional and combined with AND
    - newest first
    """
    rows = properties.list_properties(
        db,
        status=status,
        property_type=property_type,
        location=location,
        min_price=min_price,
        max_price=max_price,
        limit=limit,
    )
    return {"properties": rows}


@router.get("/{property_id}", response_model=PropertyOut)
def get_property(property_id: int, db: Session = Depends(get_db)):
    return properties.get_property(db, property_id)


@router.post("", response_model=PropertyOut, status_code=201)
def create_property(
    body: PropertyCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return properties.create_property(db, user, body.model_dump())


@router.patch("/{property_id}", response_model=PropertyOut)
def update_property(
    property_id: int,
    body: PropertyUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return properties.update_property(db, user, property_id, body.model_dump(exclude_unset=True))


@router.delete("/{property_id}", status_code=204)
def delete_property(
    property_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    properties.delete_property(db, user, property_id)
    return Response(status_code=204)


@router.post("/{property_id}/media", response_model=MediaOut, status_code=201)
def add_media(
    property_id: int,
    body: MediaCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return properties.add_media(
        db,
        user,
        property_id,
        file_path=body.file_path,
        media_type=body.media_type,
        is_primary=body.is_primary,
        sort_order=body.sort_order,
    )


# ───── Inquiries ─────
@router.post("/{property_id}/inquiries", response_model=InquiryOut, status_code=201)
def create_inquiry(
    property_id: int,
    body: InquiryCreate,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Guests and signed-in users alike; the listing agent gets a notification."""
    return inquiries.create_inquiry(db, property_id, sender=user, **body.model_dump())


@router.get("/{property_id}/inquiries", response_model=List[InquiryOut])
def list_inquiries(
    property_id: int,
    status: Optional[InquiryStatus] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return inquiries.list_inquiries(db, user, property_id, status=status)


@router.patch("/{property_id}/inquiries/{inquiry_id}", response_model=InquiryOut)
def update_inquiry(
    property_id: int,
    inquiry_id: int,
    body: InquiryUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return inquiries.update_inquiry(db, user, property_id, inquiry_id, body.model_dump(exclude_unset=True))
