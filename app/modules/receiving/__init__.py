# app/modules/receiving/__init__.py
"""
Módulo Receiving - Recepción de mercancía

Funcionalidades:
- Registro de facturas de proveedor con sus líneas
- Escaneo de factura y de cada ítem (validación de código de barras)
- Conteo de cantidades reales y carga en carros de acomodo
- Cierre de factura con detección de discrepancias
"""

from .router import router as receiving_router
from .service import ReceivingService
from .repository import ReceivingRepository

__all__ = [
    "receiving_router",
    "ReceivingService",
    "ReceivingRepository"
]
