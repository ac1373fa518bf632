# app/modules/locations/schemas.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.workflow import LocationStatus

class LocationCreate(BaseModel):
    """Alta de celda de almacenamiento"""
    barcode: str = Field(..., min_length=1, description="Código de barras único de la celda")
    zone: str = Field(..., min_length=1)
    aisle: str = Field(..., min_length=1)
    rack: str = Field(..., min_length=1)
    level: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    capacity: int = Field(..., gt=0, description="Capacidad total en unidades")

class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    barcode: str
    zone: str
    aisle: str
    rack: str
    level: str
    position: str
    capacity: int
    used_capacity: int
    status: LocationStatus
    created_at: Optional[datetime] = None
