# app/modules/locations/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session

from app.shared.database.models import Location

class LocationRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_location(self, location_data: dict) -> Location:
        location = Location(**location_data)
        self.db.add(location)
        self.db.flush()
        return location
    
    def get_by_id(self, location_id: int) -> Optional[Location]:
        return self.db.query(Location).filter(Location.id == location_id).first()
    
    def get_by_barcode(self, barcode: str) -> Optional[Location]:
        return self.db.query(Location).filter(Location.barcode == barcode).first()
    
    def list_locations(self, status: Optional[str] = None) -> List[Location]:
        query = self.db.query(Location)
        if status:
            query = query.filter(Location.status == status)
        return query.order_by(Location.zone, Location.aisle, Location.rack, Location.level, Location.position).all()
