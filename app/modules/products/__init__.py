# app/modules/products/__init__.py
"""
Módulo Products - Catálogo de productos

- Alta manual de productos (los SKU nuevos también se registran al crear facturas)
- Listado con filtro por categoría y por existencia
- Detalle con stock total y desglose por ubicación
- Búsqueda por código de barras

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as products_router
from .service import ProductService
from .repository import ProductRepository

__all__ = [
    "products_router",
    "ProductService",
    "ProductRepository"
]
