from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from castle_api.core.errors import ServiceError
from castle_api.core.logger import get_logger
from castle_api.services.receipt_service import Order, OrderItem, ReceiptService

router = APIRouter(tags=["mail"])
logger = get_logger(__name__)


class ProductoPayload(BaseModel):
    nombre: str
    descripcion: str = ""
    precio: Decimal


class ReceiptRequest(BaseModel):
    email: str
    producto: ProductoPayload
    cantidad: int
    alias: str = ""
    direccion: str = ""
    celular: str = ""
    nombre: str = ""

    def to_order(self) -> Order:
        return Order(
            email=self.email,
            producto=OrderItem(
                nombre=self.producto.nombre,
                descripcion=self.producto.descripcion,
                precio=self.producto.precio,
            ),
            cantidad=self.cantidad,
            alias=self.alias,
            direccion=self.direccion,
            celular=self.celular,
            nombre=self.nombre,
        )


def _get_receipt_service(request: Request) -> ReceiptService:
    svc = getattr(getattr(request.app, "state", None), "receipt_service", None)
    if not svc:
        raise RuntimeError("ReceiptService no configurado")
    return svc


@router.post("/enviar-correo")
async def send_receipt(payload: ReceiptRequest, request: Request):
    svc = _get_receipt_service(request)
    try:
        await svc.send_receipt(payload.to_order())
    except ServiceError as exc:
        logger.error("MAIL_ERROR", extra={"to": payload.email, "error": exc.message})
        return JSONResponse({"error": "Error al enviar el correo"}, status_code=500)
    except Exception:
        logger.exception("MAIL_ERROR", extra={"to": payload.email})
        return JSONResponse({"error": "Error al enviar el correo"}, status_code=500)
    return {"mensaje": "Correo enviado correctamente"}
