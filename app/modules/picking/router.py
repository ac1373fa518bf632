# app/modules/picking/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.core.workflow import PickingTaskStatus
from app.shared.database.models import User
from .service import PickingService
from .schemas import (
    PickingTaskCreate, PickingTaskResponse, PickingItemResponse,
    StartPickingRequest, StartPickingResponse,
    ScanLocationRequest, PickItemRequest, PickItemResponse
)

router = APIRouter(prefix="/picking", tags=["Picking - Recolección"])

@router.get("", response_model=List[PickingTaskResponse])
async def list_picking_tasks(
    status: Optional[PickingTaskStatus] = Query(None, description="Filtrar por estado"),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PickingService(db)
    return service.list_tasks(status)

@router.post("", response_model=PickingTaskResponse, status_code=201)
async def create_picking_task(
    task_data: PickingTaskCreate,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Crear tarea de picking
    
    Todos los pedidos deben estar en `processing`; cada línea reservada
    se asigna a la ubicación con más stock del SKU.
    """
    service = PickingService(db)
    return service.create_task(task_data)

@router.get("/{task_id}", response_model=PickingTaskResponse)
async def get_picking_task(
    task_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PickingService(db)
    return service.get_task(task_id)

@router.post("/{task_id}/start", response_model=StartPickingResponse)
async def start_picking_task(
    task_id: int,
    start_data: StartPickingRequest,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PickingService(db)
    return service.start_task(task_id, start_data.picking_cart_id)

@router.post("/{task_id}/scan-location", response_model=PickingItemResponse)
async def scan_picking_location(
    task_id: int,
    scan_data: ScanLocationRequest,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PickingService(db)
    return service.scan_location(task_id, scan_data.picking_item_id, scan_data.location_barcode)

@router.post("/{task_id}/pick", response_model=PickItemResponse)
async def pick_item(
    task_id: int,
    pick_data: PickItemRequest,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PickingService(db)
    return service.pick_item(
        task_id, pick_data.picking_item_id, pick_data.quantity, pick_data.picking_cart_id
    )
