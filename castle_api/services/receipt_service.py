"""
Purchase receipt e-mail.

There is no orders table: the e-mail sent here is the only record of the
purchase. Fields are rendered through autoescaping Jinja2 templates.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from jinja2 import Environment, PackageLoader, select_autoescape

from castle_api.core.logger import get_logger

logger = get_logger(__name__)

RECEIPT_SUBJECT = "CASTLE CLOTHING | Detalles de tu compra"

_env = Environment(
    loader=PackageLoader("castle_api", "templates"),
    autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=True),
)


@dataclass
class OrderItem:
    nombre: str
    descripcion: str
    precio: Decimal


@dataclass
class Order:
    email: str
    producto: OrderItem
    cantidad: int
    alias: str
    direccion: str
    celular: str
    nombre: str

    @property
    def total(self) -> Decimal:
        return Decimal(self.cantidad) * Decimal(self.producto.precio)


def render_receipt(order: Order) -> tuple[str, str]:
    """Return the (html, text) bodies for ``order``."""
    context = {"order": order, "producto": order.producto, "total": order.total}
    html_body = _env.get_template("receipt_email.html").render(**context)
    text_body = _env.get_template("receipt_email.txt").render(**context)
    return html_body, text_body


class ReceiptService:
    def __init__(self, mailer) -> None:
        self.mailer = mailer

    async def send_receipt(self, order: Order) -> None:
        html_body, text_body = render_receipt(order)
        await self.mailer.send(RECEIPT_SUBJECT, order.email, html_body, text_body)
        logger.info(
            "RECEIPT_SENT",
            extra={"to": order.email, "producto": order.producto.nombre, "total": str(order.total)},
        )
