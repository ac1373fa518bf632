# app/modules/orders/__init__.py
"""
Módulo Orders - Pedidos de clientes

Alta de pedidos contra el catálogo, reserva de stock (todo o nada) y
actualización directa de estado.
"""

from .router import router as orders_router
from .service import OrderService
from .repository import OrderRepository

__all__ = [
    "orders_router",
    "OrderService",
    "OrderRepository"
]
