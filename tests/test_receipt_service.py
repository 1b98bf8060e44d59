from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from castle_api.core.mailer import MailError
from castle_api.services.receipt_service import (
    RECEIPT_SUBJECT,
    Order,
    OrderItem,
    ReceiptService,
    render_receipt,
)

from conftest import FakeMailer


def _order(**overrides) -> Order:
    data = dict(
        email="cliente@example.com",
        producto=OrderItem(nombre="Tee", descripcion="Basic", precio=Decimal("19.99")),
        cantidad=2,
        alias="castle.mp",
        direccion="Calle 123",
        celular="1122334455",
        nombre="Ana",
    )
    data.update(overrides)
    return Order(**data)


def test_total_is_quantity_times_price():
    assert _order().total == Decimal("39.98")
    assert _order(cantidad=3).total == Decimal("59.97")


def test_render_includes_every_field():
    html_body, text_body = render_receipt(_order())
    for fragment in ("Ana", "Tee", "Basic", "19.99", "Calle 123", "1122334455", "castle.mp", "39.98"):
        assert fragment in html_body
        assert fragment in text_body
    assert "<p><strong>Cantidad:</strong> 2</p>" in html_body


def test_render_escapes_html():
    html_body, _ = render_receipt(_order(nombre="<script>alert(1)</script>"))
    assert "<script>" not in html_body
    assert "&lt;script&gt;" in html_body


def test_send_receipt_uses_mailer():
    mailer = FakeMailer()
    asyncio.run(ReceiptService(mailer).send_receipt(_order()))
    assert len(mailer.sent) == 1
    sent = mailer.sent[0]
    assert sent["subject"] == RECEIPT_SUBJECT
    assert sent["to"] == "cliente@example.com"
    assert "39.98" in sent["html"]


def test_send_receipt_propagates_mail_error():
    with pytest.raises(MailError):
        asyncio.run(ReceiptService(FakeMailer(fail=True)).send_receipt(_order()))
