# app/modules/locations/service.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.core.workflow import LocationStatus
from app.shared.database.models import Location
from app.shared.database.transaction import atomic
from .repository import LocationRepository
from .schemas import LocationCreate

logger = logging.getLogger(__name__)

class LocationService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = LocationRepository(db)
    
    def create_location(self, location_data: LocationCreate) -> Location:
        if self.repository.get_by_barcode(location_data.barcode):
            raise ValidationError(
                "Ya existe una ubicación con este código de barras",
                details={"barcode": location_data.barcode}
            )
        
        with atomic(self.db):
            location = self.repository.create_location({
                **location_data.model_dump(),
                "used_capacity": 0,
                "status": LocationStatus.AVAILABLE.value
            })
        
        self.db.refresh(location)
        logger.info(f"Ubicación creada: {location.barcode} (capacidad {location.capacity})")
        return location
    
    def list_locations(self, status: Optional[LocationStatus] = None) -> List[Location]:
        return self.repository.list_locations(status.value if status else None)
    
    def get_location(self, location_id: int) -> Location:
        location = self.repository.get_by_id(location_id)
        if not location:
            raise NotFoundError("Ubicación no encontrada", details={"location_id": location_id})
        return location
