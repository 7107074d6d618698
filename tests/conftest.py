from __future__ import annotations

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from mollie import get_mollie

from fakes import FakeMollie, payment_with_checkout


@pytest.fixture()
def settings() -> Settings:
    return Settings(mollie_api_key="test_dHar4XY7LxsDOtmnkVtjNVWXLSlXsM")


@pytest.fixture()
def fake_mollie() -> FakeMollie:
    return FakeMollie(response=payment_with_checkout())


@pytest.fixture()
def make_client(settings: Settings) -> Callable[[FakeMollie], TestClient]:
    def _make(mollie: FakeMollie) -> TestClient:
        app = create_app(settings)
        app.dependency_overrides[get_mollie] = lambda: mollie
        return TestClient(app, follow_redirects=False)

    return _make


@pytest.fixture()
def client(make_client, fake_mollie: FakeMollie) -> TestClient:
    return make_client(fake_mollie)


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"
