# app/modules/picking_carts/schemas.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.workflow import PickingCartStatus

class PickingCartCreate(BaseModel):
    barcode: Optional[str] = Field(None, description="Si se omite se genera PICK-CART-<timestamp>")

class PickingCartStatusUpdate(BaseModel):
    status: str

class PickingCartItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sku: str
    quantity: int
    order_id: int

class PickingCartResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    barcode: str
    status: PickingCartStatus
    assigned_to: Optional[str] = None
    picking_task_id: Optional[int] = None
    items: List[PickingCartItemResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class PickingCartSummary(BaseModel):
    id: int
    status: PickingCartStatus
    item_count: int
