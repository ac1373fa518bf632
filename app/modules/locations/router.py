# app/modules/locations/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.core.workflow import LocationStatus
from app.shared.database.models import User
from .service import LocationService
from .schemas import LocationCreate, LocationResponse

router = APIRouter(prefix="/locations", tags=["Locations - Ubicaciones"])

@router.get("", response_model=List[LocationResponse])
async def list_locations(
    status: Optional[LocationStatus] = Query(None, description="Filtrar por estado"),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Listado de celdas ordenado por zona, pasillo, rack, nivel y posición"""
    service = LocationService(db)
    return service.list_locations(status)

@router.post("", response_model=LocationResponse, status_code=201)
async def create_location(
    location_data: LocationCreate,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Alta de celda; inicia vacía y en estado `available`"""
    service = LocationService(db)
    return service.create_location(location_data)

@router.get("/{location_id}", response_model=LocationResponse)
async def get_location(
    location_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = LocationService(db)
    return service.get_location(location_id)
