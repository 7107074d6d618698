# mollie.py
import logging
from typing import Optional

import httpx
from fastapi import HTTPException, Request
from pydantic import ValidationError

from config import MOLLIE_API_URL
from models import PaymentCreate, PaymentOut

logger = logging.getLogger(__name__)


class MollieError(Exception):
    """Payment creation failed at the provider or on the way there."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MollieClient:
    """
    Thin async client for the Mollie payments API.
    One instance is shared by the whole process (see app.lifespan).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = MOLLIE_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Accept": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "MollieClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def create_payment(self, payment: PaymentCreate) -> PaymentOut:
        try:
            resp = await self._http.post("payments", json=payment.model_dump(by_alias=True))
        except httpx.RequestError as e:
            raise MollieError(f"Mollie network error: {e!s}") from e

        if resp.status_code >= 400:
            raise MollieError(
                f"Mollie payment creation failed ({resp.status_code}): {_error_detail(resp)}",
                status_code=resp.status_code,
            )

        try:
            return PaymentOut.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise MollieError(f"Unexpected Mollie response: {e!s}", status_code=resp.status_code) from e


def _error_detail(resp: httpx.Response) -> str:
    # ошибки приходят как application/hal+json: {"status": 422, "title": ..., "detail": ...}
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and data.get("detail"):
        return str(data["detail"])
    return resp.text


def get_mollie(request: Request) -> MollieClient:
    mollie = getattr(request.app.state, "mollie", None)
    if mollie is None:
        # lifespan не запускался (адаптер без startup), клиента нет
        logger.error("Mollie client is not initialised; was the app started without lifespan?")
        raise HTTPException(500, "Failed to properly create payment")
    return mollie
