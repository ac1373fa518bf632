# app/modules/inventory/__init__.py
"""
Módulo Inventory - Acomodo y libro de inventario

Cada acomodo agrega una fila (sku, ubicación, cantidad) al libro; el
stock de un SKU es la suma de sus filas. Incluye la conciliación de
conteos físicos por ubicación.
"""

from .router import router as inventory_router
from .service import InventoryService
from .repository import InventoryRepository

__all__ = [
    "inventory_router",
    "InventoryService",
    "InventoryRepository"
]
