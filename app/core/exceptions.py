# app/core/exceptions.py
"""
Errores de negocio del WMS.

Cada clase lleva el código HTTP con el que se responde y un diccionario
opcional de detalles que se devuelve junto al mensaje (valores esperados,
recibidos, cantidades disponibles, etc.).
"""
from typing import Any, Dict, Optional


class WMSError(Exception):
    status_code = 400

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code:
            self.status_code = status_code


class ValidationError(WMSError):
    """Campos faltantes, valores fuera del enum, claves duplicadas"""
    status_code = 400


class NotFoundError(WMSError):
    status_code = 404


class InvalidTransitionError(WMSError):
    """Operación intentada desde un estado no permitido"""
    status_code = 400


class CapacityError(WMSError):
    """Cantidad solicitada excede capacidad, stock o pendiente"""
    status_code = 400


class ConcurrencyConflictError(WMSError):
    status_code = 409
