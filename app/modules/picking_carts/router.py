# app/modules/picking_carts/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.core.workflow import PickingCartStatus
from app.shared.database.models import User
from .service import PickingCartService
from .schemas import PickingCartCreate, PickingCartResponse, PickingCartStatusUpdate

router = APIRouter(prefix="/picking-carts", tags=["Picking Carts - Carros"])

@router.get("", response_model=List[PickingCartResponse])
async def list_picking_carts(
    status: Optional[PickingCartStatus] = Query(None, description="Filtrar por estado"),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PickingCartService(db)
    return service.list_carts(status)

@router.post("", response_model=PickingCartResponse, status_code=201)
async def create_picking_cart(
    cart_data: Optional[PickingCartCreate] = None,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PickingCartService(db)
    return service.create_cart(cart_data.barcode if cart_data else None)

@router.get("/{cart_id}", response_model=PickingCartResponse)
async def get_picking_cart(
    cart_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PickingCartService(db)
    return service.get_cart(cart_id)

@router.patch("/{cart_id}/status", response_model=PickingCartResponse)
async def update_picking_cart_status(
    cart_id: int,
    status_data: PickingCartStatusUpdate,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Cambio manual de estado; `free` vacía y desvincula el carro"""
    service = PickingCartService(db)
    return service.update_status(cart_id, status_data.status)
