import importlib
import os

import pytest
from fastapi.testclient import TestClient


def _setup_app():
    os.environ["AUTH_SECRET"] = "test-secret"
    os.environ["LOGIN_PATH"] = "/login"
    os.environ["PROTECTED_PATHS"] = '["/dashboard"]'

    import app.bizdash.core.config as config
    import app.bizdash.core.security as security
    import app.bizdash.middleware.auth_gate as auth_gate
    import app.main as main

    importlib.reload(config)
    importlib.reload(security)
    importlib.reload(auth_gate)
    importlib.reload(main)

    return main.create_app()


@pytest.fixture()
def client():
    app = _setup_app()
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def session_token(client):
    from app.bizdash.core.security import create_access_token

    return create_access_token({"sub": "owner@example.com"})
