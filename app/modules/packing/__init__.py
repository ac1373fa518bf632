# app/modules/packing/__init__.py
"""
Módulo Packing - Empaque de pedidos recolectados
"""

from .router import router as packing_router
from .service import PackingService
from .repository import PackingRepository

__all__ = [
    "packing_router",
    "PackingService",
    "PackingRepository"
]
