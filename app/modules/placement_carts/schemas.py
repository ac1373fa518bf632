# app/modules/placement_carts/schemas.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from app.core.workflow import PlacementCartStatus

class PlacementCartItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_id: int
    invoice_item_id: int
    sku: str
    quantity: int
    placed_quantity: int

class PlacementCartResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: PlacementCartStatus
    items: List[PlacementCartItemResponse] = []
    created_at: Optional[datetime] = None
