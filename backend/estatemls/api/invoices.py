# backend/estatemls/api/invoices.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from estatemls.api.deps import get_current_user
from estatemls.db.db_connection import get_db
from estatemls.models.user import User
from estatemls.services import invoices, payments
from estatemls.services.policy import Action

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post("/generate/{payment_id}")
def generate_invoice(
    payment_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Render the invoice for one payment and return it as a download."""
    payment = payments.get_payment_for(db, user, payment_id, action=Action.INVOICE_GENERATE)
    document = invoices.render_invoice(payment)
    logger.info("invoice generated", extra={"payment_id": payment_id, "user_id": user.id})
    return Response(
        content=document,
        media_type=invoices.INVOICE_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{invoices.invoice_filename(payment)}"',
        },
    )
