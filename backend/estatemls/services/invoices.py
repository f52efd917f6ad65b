"""Invoice rendering for a single payment.

The document is HTML; it is rendered in memory and returned to the caller,
no temp files are written.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from jinja2 import Environment, PackageLoader, select_autoescape

from estatemls.core.settings import settings
from estatemls.models.payment import Payment
from estatemls.utils.formatting import format_currency, format_long_date, humanize_token

logger = logging.getLogger(__name__)

INVOICE_MEDIA_TYPE = "text/html; charset=utf-8"

_env = Environment(
    loader=PackageLoader("estatemls", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["currency"] = format_currency
_env.filters["long_date"] = format_long_date
_env.filters["humanize"] = humanize_token


def invoice_number(payment: Payment) -> str:
    return f"INV-{payment.id}"


def invoice_filename(payment: Payment) -> str:
    return f"invoice-{payment.id}.html"


def invoice_context(payment: Payment) -> Dict[str, Any]:
    purchase = payment.purchase
    buyer = purchase.buyer
    prop = purchase.property
    return {
        "company": {
            "name": settings.COMPANY_NAME,
            "legal_name": settings.COMPANY_LEGAL_NAME,
            "address": settings.COMPANY_ADDRESS_LINE,
            "city": settings.COMPANY_CITY,
            "email": settings.COMPANY_EMAIL,
        },
        "number": invoice_number(payment),
        "payment": payment,
        "buyer_name": buyer.full_name,
        "buyer": buyer,
        "property": prop,
        "purchase": purchase,
        "amount_paid": purchase.total_amount - purchase.remaining_amount,
    }


def render_invoice(payment: Payment) -> str:
    html = _env.get_template("invoice.html").render(**invoice_context(payment))
    logger.info("invoice rendered", extra={"payment_id": payment.id, "purchase_id": payment.purchase_id})
    return html
