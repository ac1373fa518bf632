# app/modules/picking_carts/__init__.py
from .router import router as picking_carts_router
from .service import PickingCartService
from .repository import PickingCartRepository

__all__ = [
    "picking_carts_router",
    "PickingCartService",
    "PickingCartRepository"
]
