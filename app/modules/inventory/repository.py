# app/modules/inventory/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func

from app.shared.database.models import InventoryRecord

class InventoryRepository:
    """
    Acceso al libro de inventario
    """
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_record(self, record_data: dict) -> InventoryRecord:
        record = InventoryRecord(**record_data)
        self.db.add(record)
        self.db.flush()
        return record
    
    def delete_record(self, record: InventoryRecord) -> None:
        self.db.delete(record)
    
    def list_records(self, sku: Optional[str] = None, location_id: Optional[int] = None) -> List[InventoryRecord]:
        query = self.db.query(InventoryRecord)
        if sku:
            query = query.filter(InventoryRecord.sku == sku)
        if location_id is not None:
            query = query.filter(InventoryRecord.location_id == location_id)
        return query.order_by(InventoryRecord.id).all()
    
    def get_records(self, sku: str, location_id: int) -> List[InventoryRecord]:
        """Filas de un SKU en una ubicación, la de mayor cantidad primero"""
        return self.db.query(InventoryRecord)\
            .filter(
                InventoryRecord.sku == sku,
                InventoryRecord.location_id == location_id
            )\
            .order_by(InventoryRecord.quantity.desc(), InventoryRecord.id)\
            .all()
    
    def get_largest_record(self, sku: str, location_id: Optional[int] = None) -> Optional[InventoryRecord]:
        """Fila con más stock (> 0) del SKU, opcionalmente en una ubicación"""
        query = self.db.query(InventoryRecord)\
            .filter(InventoryRecord.sku == sku, InventoryRecord.quantity > 0)
        if location_id is not None:
            query = query.filter(InventoryRecord.location_id == location_id)
        return query.order_by(InventoryRecord.quantity.desc(), InventoryRecord.id).first()
    
    def get_stock(self, sku: str) -> int:
        total = self.db.query(func.coalesce(func.sum(InventoryRecord.quantity), 0))\
            .filter(InventoryRecord.sku == sku)\
            .scalar()
        return int(total or 0)
