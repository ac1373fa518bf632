# app/modules/picking/__init__.py
"""
Módulo Picking - Recolección de pedidos

Funcionalidades:
- Creación de tareas para uno o varios pedidos reservados
- Selección de ubicación por mayor stock disponible
- Inicio con carro asignado, escaneo de ubicación y recolección
"""

from .router import router as picking_router
from .service import PickingService
from .repository import PickingRepository

__all__ = [
    "picking_router",
    "PickingService",
    "PickingRepository"
]
