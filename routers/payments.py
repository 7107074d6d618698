# routers/payments.py
import html
import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Mapping, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from starlette.datastructures import FormData
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from models import Amount, PaymentCreate
from mollie import MollieClient, MollieError, get_mollie

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])

# Максимальная сумма одного платежа в Mollie (лимит метода оплаты)
MAX_AMOUNT = Decimal("50000")
CENTS = Decimal("0.01")
CURRENCY = "EUR"
DEFAULT_DESCRIPTION = "Payment from website"

REDIRECT_URL = "https://www.example.com/payment/success"
CANCEL_URL = "https://www.example.com/payment/cancelled"

# Только ASCII-цифры: Decimal сам по себе принимает "1_000" и "١٢"
AMOUNT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_form(request: Request) -> Optional[FormData]:
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() not in FORM_CONTENT_TYPES:
        return None
    try:
        return await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        logger.info("Unparseable form body: %s", e)
        return None


def get_amount_from_request(form: Mapping) -> Optional[Decimal]:
    raw = form.get("amount")
    if not isinstance(raw, str):
        return None
    raw = raw.strip()
    if not AMOUNT_RE.fullmatch(raw):
        return None
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    # "-0" проходит проверку выше
    return amount.copy_abs()


def get_description_from_request(form: Mapping) -> Optional[str]:
    raw = form.get("description")
    if not isinstance(raw, str):
        return None
    return html.escape(raw)


def format_amount(amount: Decimal) -> str:
    return f"{min(amount, MAX_AMOUNT).quantize(CENTS, rounding=ROUND_HALF_UP):f}"


async def create_payment(
    mollie: MollieClient,
    amount: Decimal,
    description: Optional[str],
) -> Optional[str]:
    payment = PaymentCreate(
        amount=Amount(currency=CURRENCY, value=format_amount(amount)),
        description=description or DEFAULT_DESCRIPTION,
        redirect_url=REDIRECT_URL,
        cancel_url=CANCEL_URL,
    )
    created = await mollie.create_payment(payment)
    logger.info("Created payment %s for %s %s", created.id, payment.amount.value, CURRENCY)
    return created.checkout_url


@router.post("", status_code=303, response_class=RedirectResponse)
async def request_payment(request: Request, mollie: MollieClient = Depends(get_mollie)):
    form = await read_form(request)
    if form is None:
        raise HTTPException(400, "Invalid form data")

    amount = get_amount_from_request(form)
    if amount is None:
        raise HTTPException(400, "Invalid amount in request")

    description = get_description_from_request(form)

    try:
        checkout_url = await create_payment(mollie, amount, description)
    except MollieError as e:
        logger.warning("Mollie rejected payment: %s", e)
        checkout_url = None
    except Exception:
        logger.exception("Unexpected error while creating payment")
        checkout_url = None

    if not checkout_url:
        raise HTTPException(500, "Failed to properly create payment")

    return RedirectResponse(checkout_url, status_code=303)
