# config.py
import os
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()

MOLLIE_API_URL = "https://api.mollie.com/v2"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    mollie_api_key: str = ""
    mollie_api_url: str = MOLLIE_API_URL
    mollie_timeout: float = 10.0

    @property
    def mollie_configured(self) -> bool:
        return bool(self.mollie_api_key)


def load_settings() -> Settings:
    return Settings(
        mollie_api_key=(os.getenv("MOLLIE_API_KEY") or "").strip(),
        mollie_api_url=(os.getenv("MOLLIE_API_URL") or MOLLIE_API_URL).strip().rstrip("/"),
        mollie_timeout=float(os.getenv("MOLLIE_TIMEOUT") or 10),
    )
