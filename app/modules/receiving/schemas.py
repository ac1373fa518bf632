# app/modules/receiving/schemas.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.workflow import InvoiceStatus, InvoiceItemStatus

# ===== REQUESTS =====

class InvoiceItemCreate(BaseModel):
    product_id: str = Field(..., min_length=1, description="ID externo del producto")
    sku: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    barcode: Optional[str] = None
    expected_quantity: int = Field(..., gt=0)
    category: Optional[str] = Field(None, description="Categoría si el SKU se registra por primera vez")

class InvoiceCreate(BaseModel):
    invoice_number: str = Field(..., min_length=1)
    barcode: Optional[str] = None
    items: List[InvoiceItemCreate] = Field(..., min_length=1)

class ScanItemRequest(BaseModel):
    barcode: str = Field(..., min_length=1, description="Código leído por el escáner")

class CountItemRequest(BaseModel):
    actual_quantity: int = Field(..., ge=0)
    placement_cart_id: Optional[int] = None

# ===== RESPONSES =====

class InvoiceItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: str
    sku: str
    name: str
    barcode: Optional[str] = None
    expected_quantity: int
    actual_quantity: int
    placed_quantity: int
    status: InvoiceItemStatus
    placement_cart_id: Optional[int] = None

class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    barcode: Optional[str] = None
    status: InvoiceStatus
    items: List[InvoiceItemResponse]
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

class InvoiceSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    status: InvoiceStatus
    created_at: Optional[datetime] = None

class Discrepancy(BaseModel):
    item_id: int
    sku: str
    expected_quantity: int
    actual_quantity: int
    difference: int

class InvoiceCompletionResponse(BaseModel):
    message: str
    invoice: InvoiceResponse
    discrepancies: List[Discrepancy] = []
