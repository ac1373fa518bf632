# app/modules/shipping/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.core.workflow import TaskStatus
from app.shared.database.models import User
from .service import ShippingService
from .schemas import (
    ShippingTaskCreate, ShippingTaskResponse,
    CompleteShippingRequest, CancelShippingRequest
)

router = APIRouter(prefix="/shipping", tags=["Shipping - Despacho"])

@router.get("", response_model=List[ShippingTaskResponse])
async def list_shipping_tasks(
    status: Optional[TaskStatus] = Query(None, description="Filtrar por estado"),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ShippingService(db)
    return service.list_tasks(status)

@router.post("", response_model=ShippingTaskResponse, status_code=201)
async def create_shipping_task(
    task_data: ShippingTaskCreate,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Crear tarea de despacho
    
    Requiere pedido `packed` y una tarea de empaque completada del
    mismo pedido. La dirección de envío se copia del cliente.
    """
    service = ShippingService(db)
    return service.create_task(task_data)

@router.get("/{task_id}", response_model=ShippingTaskResponse)
async def get_shipping_task(
    task_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ShippingService(db)
    return service.get_task(task_id)

@router.post("/{task_id}/start", response_model=ShippingTaskResponse)
async def start_shipping_task(
    task_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ShippingService(db)
    return service.start_task(task_id)

@router.post("/{task_id}/complete", response_model=ShippingTaskResponse)
async def complete_shipping_task(
    task_id: int,
    complete_data: CompleteShippingRequest,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ShippingService(db)
    return service.complete_task(task_id, complete_data.tracking_number, complete_data.shipping_cost)

@router.post("/{task_id}/cancel", response_model=ShippingTaskResponse)
async def cancel_shipping_task(
    task_id: int,
    cancel_data: Optional[CancelShippingRequest] = None,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ShippingService(db)
    return service.cancel_task(task_id, cancel_data.reason if cancel_data else None)
