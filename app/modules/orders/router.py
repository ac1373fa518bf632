# app/modules/orders/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.core.workflow import OrderStatus
from app.shared.database.models import User
from .service import OrderService
from .schemas import OrderCreate, OrderResponse, OrderStatusUpdate, ReservationResponse

router = APIRouter(prefix="/orders", tags=["Orders - Pedidos"])

@router.get("", response_model=List[OrderResponse])
async def list_orders(
    status: Optional[OrderStatus] = Query(None, description="Filtrar por estado"),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Listar pedidos, más recientes primero"""
    service = OrderService(db)
    return service.list_orders(status)

@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = OrderService(db)
    return service.create_order(order_data)

@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = OrderService(db)
    return service.get_order(order_id)

@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = OrderService(db)
    return service.update_status(order_id, status_data.status)

@router.post("/{order_id}/reserve", response_model=ReservationResponse)
async def reserve_order_items(
    order_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Reservar stock del pedido
    
    Todo o nada: con stock insuficiente responde 400 con la lista
    `items` de {sku, required, available}.
    """
    service = OrderService(db)
    return service.reserve_items(order_id)
