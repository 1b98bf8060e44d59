"""Entry point for uvicorn/gunicorn (``castle_api.app_factory:app``)."""
from castle_api.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
