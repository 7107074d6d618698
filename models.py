# models.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# ===== ИСХОДЯЩИЕ (создание платежа) =====
class Amount(BaseModel):
    currency: str = "EUR"
    # Mollie ждёт строку ровно с двумя знаками после точки, например "25.50"
    value: str

class PaymentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: Amount
    description: str
    redirect_url: str = Field(..., alias="redirectUrl")
    cancel_url: str = Field(..., alias="cancelUrl")

# ===== ВХОДЯЩИЕ (ответ Mollie) =====
class Link(BaseModel):
    href: Optional[str] = None
    type: Optional[str] = None

class Links(BaseModel):
    checkout: Optional[Link] = None

class PaymentOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    status: Optional[str] = None
    links: Optional[Links] = Field(None, alias="_links")

    @property
    def checkout_url(self) -> Optional[str]:
        """_links.checkout.href, or None as soon as any level is missing."""
        if self.links is None or self.links.checkout is None:
            return None
        return self.links.checkout.href or None
