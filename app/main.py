from fastapi import FastAPI

from app.bizdash.api import api_router
from app.bizdash.core.config import settings
from app.bizdash.core.errors import setup_exception_handlers
from app.bizdash.core.logging import configure_logging
from app.bizdash.middleware.auth_gate import AuthGateMiddleware
from app.bizdash.middleware.observability import ObservabilityMiddleware
from app.bizdash.middleware.trace import TraceIdMiddleware


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(AuthGateMiddleware)
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    setup_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
