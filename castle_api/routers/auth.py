from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from castle_api.core.logger import get_logger
from castle_api.services.auth_service import AuthError, AuthService

router = APIRouter(tags=["auth"])
logger = get_logger(__name__)


class LoginRequest(BaseModel):
    username: str
    password: str


def _get_auth_service(request: Request) -> AuthService:
    svc = getattr(getattr(request.app, "state", None), "auth_service", None)
    if not svc:
        raise RuntimeError("AuthService no configurado")
    return svc


@router.post("/login")
def login(login_data: LoginRequest, request: Request):
    svc = _get_auth_service(request)
    try:
        svc.login(login_data.username, login_data.password)
    except AuthError as exc:
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)
    except Exception:
        logger.exception("LOGIN_ERROR", extra={"input_user": login_data.username[:50]})
        return JSONResponse({"error": "Error en el servidor"}, status_code=500)
    return {"mensaje": "Usuario autenticado correctamente"}
