# app/modules/products/schemas.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class Dimensions(BaseModel):
    length: Optional[float] = Field(None, ge=0)
    width: Optional[float] = Field(None, ge=0)
    height: Optional[float] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0)

class ProductCreate(BaseModel):
    """Alta de producto en el catálogo"""
    sku: str = Field(..., min_length=1, description="SKU único")
    product_id: str = Field(..., min_length=1, description="ID externo del producto")
    name: str = Field(..., min_length=1, description="Nombre del producto")
    barcode: Optional[str] = Field(None, description="Código de barras")
    category: Optional[str] = Field(None, description="Categoría")
    dimensions: Optional[Dimensions] = None

class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sku: str
    product_id: str
    name: str
    barcode: Optional[str] = None
    category: str
    dimensions: Dimensions
    created_at: Optional[datetime] = None

class ProductWithStock(ProductResponse):
    stock_quantity: int = 0

class LocationInfo(BaseModel):
    barcode: str
    zone: str
    aisle: str
    rack: str
    level: str
    position: str

class ProductStockLocation(BaseModel):
    """Fila del inventario con la ubicación donde está el producto"""
    location_id: int
    quantity: int
    location_info: Optional[LocationInfo] = None

class ProductDetail(ProductWithStock):
    locations: List[ProductStockLocation] = []
