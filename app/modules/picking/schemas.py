# app/modules/picking/schemas.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.workflow import PickingTaskStatus, PickingItemStatus
from app.modules.picking_carts.schemas import PickingCartResponse, PickingCartSummary

# ===== REQUESTS =====

class PickingTaskCreate(BaseModel):
    order_ids: List[int] = Field(..., min_length=1)
    assigned_to: Optional[str] = None

class StartPickingRequest(BaseModel):
    picking_cart_id: int

class ScanLocationRequest(BaseModel):
    picking_item_id: int
    location_barcode: str = Field(..., min_length=1)

class PickItemRequest(BaseModel):
    picking_item_id: int
    quantity: int = Field(..., gt=0)
    picking_cart_id: int

# ===== RESPONSES =====

class PickingItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    order_item_id: int
    product_id: int
    sku: str
    name: str
    quantity: int
    picked_quantity: int
    location_id: int
    status: PickingItemStatus

class PickingTaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_ids: List[int]
    assigned_to: Optional[str] = None
    status: PickingTaskStatus
    items: List[PickingItemResponse]
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

class StartPickingResponse(BaseModel):
    task: PickingTaskResponse
    picking_cart: PickingCartResponse

class InventoryRemaining(BaseModel):
    remaining: int

class PickItemResponse(BaseModel):
    picking_item: PickingItemResponse
    remaining_quantity: int
    picking_cart: PickingCartSummary
    inventory: InventoryRemaining
