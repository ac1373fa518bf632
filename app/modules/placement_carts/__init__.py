# app/modules/placement_carts/__init__.py
"""
Módulo Placement Carts - Carros de acomodo

Contenedores de preparación usados durante el acomodo: reciben la mercancía
contada de las facturas y se liberan cuando todo lo cargado quedó ubicado.
"""

from .router import router as placement_carts_router
from .service import PlacementCartService
from .repository import PlacementCartRepository

__all__ = [
    "placement_carts_router",
    "PlacementCartService",
    "PlacementCartRepository"
]
