#!/usr/bin/env python3
"""
Definir (o crear) la contraseña de un usuario directamente en la base.

Sirve para reemplazar la contraseña por defecto del admin despues del deploy.

Uso:
  python scripts/set_password.py --username admin --password 'nueva-clave' [--create]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Garantiza que el paquete sea importable cuando se ejecuta directamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from castle_api.core.security import hash_password  # noqa: E402
from castle_api.repositories.sql_repository import SQLRepository  # noqa: E402

MIN_LENGTH = 8


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Definir contraseña de usuario")
    ap.add_argument("--username", required=True, help="Usuario (ej.: admin)")
    ap.add_argument("--password", required=True, help=f"Nueva contraseña (min. {MIN_LENGTH} caracteres)")
    ap.add_argument("--create", action="store_true", help="Crear el usuario si no existe")
    args = ap.parse_args(argv)

    username = (args.username or "").strip()
    if not username:
        raise SystemExit("Usuario invalido")
    if len(args.password or "") < MIN_LENGTH:
        raise SystemExit(f"La contraseña debe tener al menos {MIN_LENGTH} caracteres")

    repo = SQLRepository()
    password_hash = hash_password(args.password)
    if repo.get_user(username):
        repo.update_user_password(username, password_hash)
        print(f"OK: contraseña actualizada para '{username}'")
    elif args.create:
        repo.create_user(username, password_hash)
        print(f"OK: usuario '{username}' creado")
    else:
        raise SystemExit(f"Usuario '{username}' no existe (use --create)")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
