# backend/estatemls/schemas/user.py
from __future__ import annotations

from typing import Optional

from estatemls.models.enums import UserRole
from estatemls.schemas.common import ApiModel


class BuyerOut(ApiModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    phone: Optional[str] = None


class UserOut(BuyerOut):
    role: UserRole


class UserProvision(ApiModel):
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class RoleUpdate(ApiModel):
    role: UserRole
