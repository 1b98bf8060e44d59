"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import delete, select, text, update

from castle_api.db.models import Product, User
from castle_api.db.session import get_session


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    def ping(self) -> None:
        with get_session() as session:
            session.execute(text("SELECT 1"))

    # -------------------------- users --------------------------
    def get_user(self, username: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.username == username)
            return session.execute(stmt).scalars().first()

    def create_user(self, username: str, password_hash: str) -> User:
        entity = User(username=username, password=password_hash)
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def update_user_password(self, username: str, password_hash: str) -> int:
        with get_session() as session:
            stmt = update(User).where(User.username == username).values(password=password_hash)
            result = session.execute(stmt)
            session.commit()
            return result.rowcount

    # -------------------------- products --------------------------
    def list_products(self) -> list[Product]:
        with get_session() as session:
            return session.execute(select(Product)).scalars().all()

    def get_product(self, product_id: int) -> Optional[Product]:
        with get_session() as session:
            return session.get(Product, product_id)

    def create_product(self, nombre: str, descripcion: str, precio: Decimal, imagen_url: str | None) -> Product:
        entity = Product(nombre=nombre, descripcion=descripcion, precio=precio, imagen_url=imagen_url)
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def update_product(
        self,
        product_id: int,
        *,
        nombre: str,
        descripcion: str,
        precio: Decimal,
        imagen_url: str | None,
    ) -> int:
        """Rewrite every mutable column; returns the number of matched rows."""
        with get_session() as session:
            stmt = (
                update(Product)
                .where(Product.id == product_id)
                .values(nombre=nombre, descripcion=descripcion, precio=precio, imagen_url=imagen_url)
            )
            result = session.execute(stmt)
            session.commit()
            return result.rowcount

    def delete_product(self, product_id: int) -> int:
        with get_session() as session:
            result = session.execute(delete(Product).where(Product.id == product_id))
            session.commit()
            return result.rowcount
