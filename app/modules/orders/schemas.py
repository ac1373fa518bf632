# app/modules/orders/schemas.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.workflow import OrderStatus, OrderItemStatus

class CustomerInfo(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

class OrderItemCreate(BaseModel):
    sku: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)

class OrderCreate(BaseModel):
    order_number: str = Field(..., min_length=1)
    external_order_id: Optional[str] = None
    customer: Optional[CustomerInfo] = None
    priority: int = Field(0, ge=0, description="Mayor número = más prioritario")
    items: List[OrderItemCreate] = Field(..., min_length=1)

class OrderStatusUpdate(BaseModel):
    status: str = Field(..., description="Nuevo estado del pedido")

class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    sku: str
    name: str
    quantity: int
    picked_quantity: int
    status: OrderItemStatus

class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_number: str
    external_order_id: Optional[str] = None
    customer: CustomerInfo
    status: OrderStatus
    priority: int
    items: List[OrderItemResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ItemAvailability(BaseModel):
    sku: str
    required: int
    available: int
    status: str

class ReservationResponse(BaseModel):
    message: str
    order: OrderResponse
    items: List[ItemAvailability]
