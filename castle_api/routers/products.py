from __future__ import annotations

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from castle_api.core.errors import ServiceError
from castle_api.core.logger import get_logger
from castle_api.services.catalog_service import CatalogService, ImageFile, ProductNotFoundError

router = APIRouter(prefix="/productos", tags=["productos"])
logger = get_logger(__name__)


def _get_catalog_service(request: Request) -> CatalogService:
    svc = getattr(getattr(request.app, "state", None), "catalog_service", None)
    if not svc:
        raise RuntimeError("CatalogService no configurado")
    return svc


def _image(upload: UploadFile | str | None) -> ImageFile | None:
    # a plain text "imagen" field counts as no image
    if not isinstance(upload, StarletteUploadFile) or not upload.filename:
        return None
    return ImageFile(filename=upload.filename, file=upload.file)


def _product_id(raw: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ProductNotFoundError()


def _error_response(exc: ServiceError, fallback: str, event: str, **extra) -> JSONResponse:
    """Client errors keep their message; server-side ones get the generic one."""
    if exc.status_code >= 500:
        logger.error(event, extra={"error": exc.message, **extra})
        return JSONResponse({"error": fallback}, status_code=500)
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


@router.get("")
def list_products(request: Request):
    svc = _get_catalog_service(request)
    try:
        return svc.list_products()
    except Exception:
        logger.exception("PRODUCT_LIST_ERROR")
        return JSONResponse({"error": "Error al obtener productos"}, status_code=500)


@router.post("")
def create_product(
    request: Request,
    nombre: str = Form(""),
    descripcion: str = Form(""),
    precio: str = Form(""),
    imagen: UploadFile | str | None = File(None),
):
    svc = _get_catalog_service(request)
    try:
        result = svc.create_product(nombre, descripcion, precio, _image(imagen))
    except ServiceError as exc:
        return _error_response(exc, "Error al crear producto", "PRODUCT_CREATE_ERROR")
    except Exception:
        logger.exception("PRODUCT_CREATE_ERROR")
        return JSONResponse({"error": "Error al crear producto"}, status_code=500)
    return {"mensaje": "Producto creado correctamente", "imagen_url": result.imagen_url}


@router.put("/{product_id}")
def update_product(
    product_id: str,
    request: Request,
    nombre: str = Form(""),
    descripcion: str = Form(""),
    precio: str = Form(""),
    imagen: UploadFile | str | None = File(None),
):
    svc = _get_catalog_service(request)
    try:
        result = svc.update_product(_product_id(product_id), nombre, descripcion, precio, _image(imagen))
    except ServiceError as exc:
        return _error_response(exc, "Error al actualizar producto", "PRODUCT_UPDATE_ERROR", product_id=product_id)
    except Exception:
        logger.exception("PRODUCT_UPDATE_ERROR", extra={"product_id": product_id})
        return JSONResponse({"error": "Error al actualizar producto"}, status_code=500)
    return {"mensaje": "Producto actualizado correctamente", "imagen_url": result.imagen_url}


@router.delete("/{product_id}")
def delete_product(product_id: str, request: Request):
    svc = _get_catalog_service(request)
    try:
        svc.delete_product(_product_id(product_id))
    except ServiceError as exc:
        return _error_response(exc, "Error al eliminar producto", "PRODUCT_DELETE_ERROR", product_id=product_id)
    except Exception:
        logger.exception("PRODUCT_DELETE_ERROR", extra={"product_id": product_id})
        return JSONResponse({"error": "Error al eliminar producto"}, status_code=500)
    return {"mensaje": "Producto eliminado correctamente"}
