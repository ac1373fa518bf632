# app/modules/placement_carts/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.core.workflow import PlacementCartStatus
from app.shared.database.models import User
from .service import PlacementCartService
from .schemas import PlacementCartResponse

router = APIRouter(prefix="/placement-carts", tags=["Placement Carts - Acomodo"])

@router.get("", response_model=List[PlacementCartResponse])
async def list_placement_carts(
    status: Optional[PlacementCartStatus] = Query(None, description="Filtrar por estado"),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PlacementCartService(db)
    return service.list_carts(status)

@router.post("", response_model=PlacementCartResponse, status_code=201)
async def create_placement_cart(
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Nuevo carro de acomodo, libre y vacío"""
    service = PlacementCartService(db)
    return service.create_cart()

@router.get("/{cart_id}", response_model=PlacementCartResponse)
async def get_placement_cart(
    cart_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PlacementCartService(db)
    return service.get_cart(cart_id)
