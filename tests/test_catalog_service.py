from __future__ import annotations

import io
from decimal import Decimal

import pytest

from castle_api.repositories.sql_repository import SQLRepository
from castle_api.services.catalog_service import (
    CatalogService,
    ImageFile,
    InvalidPriceError,
    MissingImageError,
    ProductNotFoundError,
    parse_price,
)


class VanishingRepository(SQLRepository):
    """Simulates a delete landing between the lookup and the update."""

    def update_product(self, product_id, **values):
        return 0


class ExplodingImageHost:
    def upload(self, file, filename=None):
        raise AssertionError("upload must not be called")


def _image(name: str = "tee.png", data: bytes = b"png-bytes") -> ImageFile:
    return ImageFile(filename=name, file=io.BytesIO(data))


def test_create_requires_image_before_anything_else(temp_db):
    svc = CatalogService(ExplodingImageHost())
    with pytest.raises(MissingImageError) as exc:
        svc.create_product("Tee", "Basic", "not-a-number", None)
    assert exc.value.message == "No se proporcionó una imagen"
    with pytest.raises(MissingImageError):
        svc.create_product("Tee", "Basic", "19.99", ImageFile(filename="", file=io.BytesIO()))
    assert svc.list_products() == []


def test_create_rejects_bad_price_without_uploading(temp_db):
    svc = CatalogService(ExplodingImageHost())
    with pytest.raises(InvalidPriceError):
        svc.create_product("Tee", "Basic", "abc", _image())


def test_create_then_list(temp_db, image_host):
    svc = CatalogService(image_host)
    result = svc.create_product("Tee", "Basic", "19.99", _image())

    assert result.imagen_url.startswith("https://")
    assert image_host.uploads == [("tee.png", b"png-bytes")]
    products = svc.list_products()
    assert products == [
        {"id": result.id, "nombre": "Tee", "descripcion": "Basic", "precio": 19.99, "imagen_url": result.imagen_url}
    ]


def test_update_without_image_keeps_url(temp_db, image_host):
    svc = CatalogService(image_host)
    created = svc.create_product("Tee", "Basic", "19.99", _image())

    updated = svc.update_product(created.id, "Tee v2", "Better", "21.00")
    assert updated.imagen_url == created.imagen_url
    assert len(image_host.uploads) == 1

    product = svc.list_products()[0]
    assert product["nombre"] == "Tee v2"
    assert product["precio"] == 21.0
    assert product["imagen_url"] == created.imagen_url


def test_update_with_image_replaces_url(temp_db, image_host):
    svc = CatalogService(image_host)
    created = svc.create_product("Tee", "Basic", "19.99", _image())

    updated = svc.update_product(created.id, "Tee", "Basic", "19.99", _image("new.png", b"new"))
    assert updated.imagen_url != created.imagen_url
    assert updated.imagen_url.endswith("/new.png")
    assert svc.list_products()[0]["imagen_url"] == updated.imagen_url


def test_update_unknown_product(temp_db):
    svc = CatalogService(ExplodingImageHost())
    with pytest.raises(ProductNotFoundError) as exc:
        svc.update_product(42, "x", "y", "1", _image())
    assert exc.value.status_code == 404


def test_update_race_reports_not_found(temp_db, image_host):
    repo = VanishingRepository()
    entity = repo.create_product("Tee", "Basic", Decimal("1"), "https://img/1")
    svc = CatalogService(image_host, repository=repo)
    with pytest.raises(ProductNotFoundError):
        svc.update_product(entity.id, "Tee", "Basic", "1")


def test_delete_twice(temp_db, image_host):
    svc = CatalogService(image_host)
    created = svc.create_product("Tee", "Basic", "19.99", _image())
    svc.delete_product(created.id)
    with pytest.raises(ProductNotFoundError):
        svc.delete_product(created.id)


@pytest.mark.parametrize("value", ["", "abc", "NaN", "Infinity", None])
def test_parse_price_rejects(value):
    with pytest.raises(InvalidPriceError):
        parse_price(value)


def test_parse_price_accepts_decimal_text():
    assert parse_price(" 19.99 ") == Decimal("19.99")
    assert parse_price(20) == Decimal("20")
