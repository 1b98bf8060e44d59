"""SQLAlchemy models mirroring the existing MySQL schema."""
from __future__ import annotations

from sqlalchemy import Column, Integer, Numeric, String, Text

from .session import Base


class User(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False)
    # password hash, never the plain value
    password = Column(String(255), nullable=False)


class Product(Base):
    __tablename__ = "productos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(255), nullable=False, default="")
    descripcion = Column(Text, nullable=True)
    precio = Column(Numeric(10, 2), nullable=False, default=0)
    imagen_url = Column(String(512), nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.nombre,
            "descripcion": self.descripcion,
            "precio": float(self.precio) if self.precio is not None else None,
            "imagen_url": self.imagen_url,
        }
