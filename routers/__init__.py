# routers/__init__.py
from .payments import router as payments_router
