"""
FastAPI routers grouped by resource.

Each module exposes an APIRouter that create_app() includes.
"""
