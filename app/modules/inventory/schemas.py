# app/modules/inventory/schemas.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.workflow import LocationStatus
from app.modules.locations.schemas import LocationResponse
from app.modules.receiving.schemas import InvoiceItemResponse

class PlaceItemRequest(BaseModel):
    location_id: int
    quantity: int = Field(..., gt=0)

class AdjustInventoryRequest(BaseModel):
    sku: str = Field(..., min_length=1)
    location_id: int
    actual_quantity: int = Field(..., ge=0, description="Cantidad física contada")

class InventoryRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sku: str
    quantity: int
    location_id: int
    invoice_id: Optional[int] = None
    invoice_item_id: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None

class PlaceItemResponse(BaseModel):
    message: str
    inventory: InventoryRecordResponse
    location: LocationResponse
    item: InvoiceItemResponse

class AdjustmentReport(BaseModel):
    """Diferencia entre lo registrado y lo contado en una ubicación"""
    sku: str
    location_id: int
    previous_quantity: int
    actual_quantity: int
    delta: int
    location_used_capacity: int
    location_status: LocationStatus

class StockResponse(BaseModel):
    sku: str
    quantity: int
