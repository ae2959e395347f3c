from fastapi import APIRouter, Request

from app.bizdash.core.error_catalog import AppError, ErrorCatalog

router = APIRouter()


@router.get("/login")
async def login(request: Request, callbackUrl: str | None = None):
    return {
        "status": "login_required",
        "callback_url": callbackUrl,
        "trace_id": getattr(request.state, "trace_id", ""),
    }


@router.get("/dashboard")
async def dashboard(request: Request):
    session = getattr(request.state, "session", None)
    if not session:
        raise AppError(ErrorCatalog.INVALID_TOKEN)
    return {
        "status": "ok",
        "subject": session.get("sub"),
        "trace_id": getattr(request.state, "trace_id", ""),
    }
