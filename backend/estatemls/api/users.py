# backend/estatemls/api/users.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from estatemls.api.deps import get_current_user, get_identity
from estatemls.db.db_connection import get_db
from estatemls.models.user import User
from estatemls.schemas.property import PropertyCard
from estatemls.schemas.saved_search import SavedSearchCreate, SavedSearchOut, SavedSearchUpdate
from estatemls.schemas.user import RoleUpdate, UserOut, UserProvision
from estatemls.services import favorites, saved_searches, users
from estatemls.services.identity import Identity

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserOut)
def get_me(user: User = Depends(get_current_user)):
    return user


@router.post("/me", response_model=UserOut)
def provision_me(
    body: UserProvision,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """First call after sign-in: create (or refresh) the local user row."""
    return users.provision(
        db,
        identity.subject,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )


@router.patch("/{user_id}/role", response_model=UserOut)
def change_role(
    user_id: int,
    body: RoleUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return users.change_role(db, user, user_id, body.role)


# ───── Favorites ─────
@router.get("/me/favorites", response_model=List[PropertyCard])
def list_favorites(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return favorites.list_favorites(db, user)


@router.put("/me/favorites/{property_id}", status_code=204)
def add_favorite(
    property_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    favorites.add_favorite(db, user, property_id)
    return Response(status_code=204)


@router.delete("/me/favorites/{property_id}", status_code=204)
def remove_favorite(
    property_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    favorites.remove_favorite(db, user, property_id)
    return Response(status_code=204)


# ───── Saved searches ─────
@router.get("/me/saved-searches", response_model=List[SavedSearchOut])
def list_saved_searches(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return saved_searches.list_saved_searches(db, user)


@router.post("/me/saved-searches", response_model=SavedSearchOut, status_code=201)
def create_saved_search(
    body: SavedSearchCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return saved_searches.create_saved_search(
        db,
        user,
        name=body.name,
        search_params=body.search_params.model_dump(mode="json", exclude_none=True),
        notifications_enabled=body.notifications_enabled,
    )


@router.patch("/me/saved-searches/{search_id}", response_model=SavedSearchOut)
def update_saved_search(
    search_id: int,
    body: SavedSearchUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = body.model_dump(exclude_unset=True)
    if body.search_params is not None:
        data["search_params"] = body.search_params.model_dump(mode="json", exclude_none=True)
    return saved_searches.update_saved_search(db, user, search_id, data)


@router.delete("/me/saved-searches/{search_id}", status_code=204)
def delete_saved_search(
    search_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    saved_searches.delete_saved_search(db, user, search_id)
    return Response(status_code=204)


@router.get("/me/saved-searches/{search_id}/results", response_model=List[PropertyCard])
def run_saved_search(
    search_id: int,
    limit: Optional[int] = Query(None, ge=1, le=500),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return saved_searches.run_saved_search(db, user, search_id, limit=limit)
