"""Product catalog use cases (list, create, update, delete)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import BinaryIO, Optional

from castle_api.core.errors import ServiceError
from castle_api.core.logger import get_logger
from castle_api.repositories.sql_repository import SQLRepository

logger = get_logger(__name__)


class CatalogError(ServiceError):
    """Base exception for catalog workflows."""


class MissingImageError(CatalogError):
    code = "missing_image"

    def __init__(self, message: str = "No se proporcionó una imagen"):
        super().__init__(message)


class InvalidPriceError(CatalogError):
    code = "invalid_price"

    def __init__(self, message: str = "Precio invalido"):
        super().__init__(message)


class ProductNotFoundError(CatalogError):
    code = "not_found"
    status_code = 404

    def __init__(self, message: str = "Producto no encontrado"):
        super().__init__(message)


@dataclass
class ImageFile:
    filename: str
    file: BinaryIO


@dataclass
class ProductResult:
    id: int
    imagen_url: Optional[str]


def parse_price(value) -> Decimal:
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidPriceError()
    if not price.is_finite():
        raise InvalidPriceError()
    return price


def _has_file(image: Optional[ImageFile]) -> bool:
    return image is not None and bool((image.filename or "").strip())


class CatalogService:
    """Keeps the ``productos`` table and the image host in step."""

    def __init__(self, image_host, repository: SQLRepository | None = None) -> None:
        self.image_host = image_host
        self.repository = repository or SQLRepository()

    def list_products(self) -> list[dict]:
        return [product.to_dict() for product in self.repository.list_products()]

    def create_product(self, nombre: str, descripcion: str, precio, image: Optional[ImageFile]) -> ProductResult:
        if not _has_file(image):
            raise MissingImageError()
        price = parse_price(precio)
        url = self.image_host.upload(image.file, filename=image.filename)
        # an insert failure leaves the uploaded image orphaned on the host
        entity = self.repository.create_product(nombre, descripcion, price, url)
        logger.info("PRODUCT_CREATED", extra={"product_id": entity.id, "imagen_url": url})
        return ProductResult(id=entity.id, imagen_url=url)

    def update_product(
        self,
        product_id: int,
        nombre: str,
        descripcion: str,
        precio,
        image: Optional[ImageFile] = None,
    ) -> ProductResult:
        current = self.repository.get_product(product_id)
        if not current:
            raise ProductNotFoundError()
        price = parse_price(precio)
        url = current.imagen_url
        if _has_file(image):
            url = self.image_host.upload(image.file, filename=image.filename)
        affected = self.repository.update_product(
            product_id,
            nombre=nombre,
            descripcion=descripcion,
            precio=price,
            imagen_url=url,
        )
        if not affected:
            # removed between the lookup and the update
            raise ProductNotFoundError()
        logger.info("PRODUCT_UPDATED", extra={"product_id": product_id, "imagen_url": url})
        return ProductResult(id=product_id, imagen_url=url)

    def delete_product(self, product_id: int) -> None:
        # the image stays on the host
        if not self.repository.delete_product(product_id):
            raise ProductNotFoundError()
        logger.info("PRODUCT_DELETED", extra={"product_id": product_id})
