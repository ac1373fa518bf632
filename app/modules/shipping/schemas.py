# app/modules/shipping/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.workflow import TaskStatus

class ShippingTaskCreate(BaseModel):
    order_id: int
    packing_task_id: int
    assigned_to: Optional[str] = None
    shipping_method: Optional[str] = None
    carrier: Optional[str] = None

class CompleteShippingRequest(BaseModel):
    tracking_number: str = Field(..., min_length=1)
    shipping_cost: Optional[Decimal] = Field(None, ge=0)

class CancelShippingRequest(BaseModel):
    reason: Optional[str] = None

class ShippingTaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    packing_task_id: int
    assigned_to: Optional[str] = None
    status: TaskStatus
    carrier: Optional[str] = None
    shipping_method: Optional[str] = None
    tracking_number: Optional[str] = None
    shipping_cost: Optional[Decimal] = None
    cancellation_reason: Optional[str] = None
    shipping_name: Optional[str] = None
    shipping_address: Optional[str] = None
    shipping_phone: Optional[str] = None
    shipping_email: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
