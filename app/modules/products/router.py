# app/modules/products/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.shared.database.models import User
from .service import ProductService
from .schemas import ProductCreate, ProductDetail, ProductResponse, ProductWithStock

router = APIRouter(prefix="/products", tags=["Products - Catálogo"])

@router.get("", response_model=List[ProductWithStock])
async def list_products(
    category: Optional[str] = Query(None, description="Filtrar por categoría"),
    in_stock: bool = Query(False, alias="inStock", description="Solo productos con existencia"),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Listado de productos del catálogo

    Cada producto incluye su cantidad total (`stock_quantity`); con
    `inStock=true` solo se devuelven productos con stock positivo.
    """
    service = ProductService(db)
    return service.list_products(category, in_stock)

@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    product_data: ProductCreate,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Alta de producto; el SKU debe ser único"""
    service = ProductService(db)
    return service.create_product(product_data)

@router.get("/barcode/{barcode}", response_model=ProductResponse)
async def get_product_by_barcode(
    barcode: str,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Búsqueda de producto por código de barras"""
    service = ProductService(db)
    return service.get_by_barcode(barcode)

@router.get("/{product_id}", response_model=ProductDetail)
async def get_product(
    product_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Detalle de producto con stock total y ubicaciones"""
    service = ProductService(db)
    return service.get_product(product_id)
