from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garantiza que el paquete sea importable durante los tests locales
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from castle_api.core import config as core_config  # noqa: E402
from castle_api.core.mailer import MailError  # noqa: E402
from castle_api.db import create_tables  # noqa: E402
from castle_api.db import session as db_session  # noqa: E402
from castle_api.db.models import User  # noqa: E402
from sqlalchemy import func, select  # noqa: E402


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """SQLite temporal con teardown completo para no dejar el archivo bloqueado en Windows."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.delenv("ADMIN_USERNAME", raising=False)
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    _reset_caches()

    engine = db_session.get_engine()
    create_tables.drop_all(engine)
    create_tables.create_all(engine)

    yield db_file

    try:
        create_tables.drop_all(engine)
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    _reset_caches()


def count_users(username: str) -> int:
    with db_session.get_session() as session:
        stmt = select(func.count()).select_from(User).where(User.username == username)
        return session.execute(stmt).scalar_one()


class FakeImageHost:
    """Stands in for Cloudinary; returns a deterministic secure URL per upload."""

    def __init__(self) -> None:
        self.uploads: list[tuple[str, bytes]] = []

    def upload(self, file, filename=None) -> str:
        self.uploads.append((filename, file.read()))
        return f"https://res.cloudinary.com/demo/image/upload/v{len(self.uploads)}/{filename}"


class FakeMailer:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict] = []

    async def send(self, subject, to_email, html_body, text_body=None) -> None:
        if self.fail:
            raise MailError("relay rejected the message")
        self.sent.append({"subject": subject, "to": to_email, "html": html_body, "text": text_body})


@pytest.fixture()
def image_host():
    return FakeImageHost()


@pytest.fixture()
def mailer():
    return FakeMailer()
