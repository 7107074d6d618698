# app.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, load_settings
from mollie import MollieClient
from routers import payments_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.mollie_configured:
            logger.warning("MOLLIE_API_KEY is not set; payment creation will fail")
        async with MollieClient(
            settings.mollie_api_key,
            base_url=settings.mollie_api_url,
            timeout=settings.mollie_timeout,
        ) as mollie:
            app.state.mollie = mollie
            yield

    app = FastAPI(title="Payment Request API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    @app.exception_handler(StarletteHTTPException)
    async def plain_text_http_exception(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.get("/health")
    async def health():
        return {"api": "ok", "mollie": settings.mollie_configured}

    app.include_router(payments_router)
    return app


app = create_app()
