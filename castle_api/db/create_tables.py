"""
Create (or drop) the ``usuarios``/``productos`` tables.

Production databases already carry the schema; this is meant for local
development and for the test suite's throwaway SQLite files.

Uso:
  python -m castle_api.db.create_tables [--drop]
"""
from __future__ import annotations

import argparse

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(engine: Engine | None = None) -> None:
    Base.metadata.create_all(bind=engine or get_engine())


def drop_all(engine: Engine | None = None) -> None:
    Base.metadata.drop_all(bind=engine or get_engine())


def main() -> None:
    ap = argparse.ArgumentParser(description="Crear tablas de la tienda")
    ap.add_argument("--drop", action="store_true", help="Eliminar las tablas antes de crearlas")
    args = ap.parse_args()
    if args.drop:
        drop_all()
    create_all()
    print("Database tables created successfully.")


if __name__ == "__main__":
    try:
        main()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
