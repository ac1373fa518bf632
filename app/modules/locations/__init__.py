# app/modules/locations/__init__.py
"""
Módulo Locations - Registro de celdas de almacenamiento

Cada celda tiene capacidad fija y un contador de capacidad usada; el estado
(available / reserved / occupied) se deriva siempre de la ocupación.
"""

from .router import router as locations_router
from .service import LocationService
from .repository import LocationRepository

__all__ = [
    "locations_router",
    "LocationService",
    "LocationRepository"
]
