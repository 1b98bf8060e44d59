"""
FastAPI routers grouped by domain (auth, products, mail).

Each module exposes an APIRouter that is included by ``castle_api.app``.
"""
