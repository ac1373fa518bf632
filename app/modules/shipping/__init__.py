# app/modules/shipping/__init__.py
from .router import router as shipping_router
from .service import ShippingService
from .repository import ShippingRepository

__all__ = [
    "shipping_router",
    "ShippingService",
    "ShippingRepository"
]
