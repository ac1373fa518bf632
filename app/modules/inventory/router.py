# app/modules/inventory/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.shared.database.models import User
from .service import InventoryService
from .schemas import (
    PlaceItemRequest, PlaceItemResponse, AdjustInventoryRequest,
    AdjustmentReport, InventoryRecordResponse, StockResponse
)

router = APIRouter(prefix="/inventory", tags=["Inventory - Acomodo"])

@router.get("", response_model=List[InventoryRecordResponse])
async def list_inventory(
    sku: Optional[str] = Query(None),
    location_id: Optional[int] = Query(None),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = InventoryService(db)
    return service.list_inventory(sku, location_id)

@router.get("/stock/{sku}", response_model=StockResponse)
async def get_stock(
    sku: str,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = InventoryService(db)
    return StockResponse(sku=sku, quantity=service.get_stock(sku))

@router.post("/invoices/{invoice_id}/items/{item_id}/place", response_model=PlaceItemResponse)
async def place_item(
    invoice_id: int,
    item_id: int,
    place_data: PlaceItemRequest,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Ubicar mercancía contada en una celda
    
    Falla con 400 si el ítem no está contado, si se excede lo contado
    o si la ubicación no tiene capacidad.
    """
    service = InventoryService(db)
    return service.place_item(invoice_id, item_id, place_data.location_id, place_data.quantity)

@router.post("/adjust", response_model=AdjustmentReport)
async def adjust_inventory(
    adjust_data: AdjustInventoryRequest,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = InventoryService(db)
    return service.adjust_inventory(adjust_data.sku, adjust_data.location_id, adjust_data.actual_quantity)
