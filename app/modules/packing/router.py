# app/modules/packing/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.core.workflow import TaskStatus
from app.shared.database.models import User
from .service import PackingService
from .schemas import PackingTaskCreate, PackingTaskResponse, CompletePackingRequest

router = APIRouter(prefix="/packing", tags=["Packing - Empaque"])

@router.get("", response_model=List[PackingTaskResponse])
async def list_packing_tasks(
    status: Optional[TaskStatus] = Query(None, description="Filtrar por estado"),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PackingService(db)
    return service.list_tasks(status)

@router.post("", response_model=PackingTaskResponse, status_code=201)
async def create_packing_task(
    task_data: PackingTaskCreate,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Crear tarea de empaque
    
    El pedido debe estar en `picked`. Tarea de picking y carro son
    opcionales; si se omiten se resuelven con `lookup_policy`
    (first, most_recent, error_on_ambiguous).
    """
    service = PackingService(db)
    return service.create_task(task_data)

@router.get("/{task_id}", response_model=PackingTaskResponse)
async def get_packing_task(
    task_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PackingService(db)
    return service.get_task(task_id)

@router.post("/{task_id}/start", response_model=PackingTaskResponse)
async def start_packing_task(
    task_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = PackingService(db)
    return service.start_task(task_id)

@router.post("/{task_id}/complete", response_model=PackingTaskResponse)
async def complete_packing_task(
    task_id: int,
    package_data: CompletePackingRequest,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Cerrar empaque: pedido a `packed` y liberación del carro"""
    service = PackingService(db)
    return service.complete_task(task_id, package_data)
