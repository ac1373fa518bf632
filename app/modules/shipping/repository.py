# app/modules/shipping/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session

from app.shared.database.models import ShippingTask

class ShippingRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_task(self, task_data: dict) -> ShippingTask:
        task = ShippingTask(**task_data)
        self.db.add(task)
        self.db.flush()
        return task
    
    def get_by_id(self, task_id: int) -> Optional[ShippingTask]:
        return self.db.query(ShippingTask).filter(ShippingTask.id == task_id).first()
    
    def list_tasks(self, status: Optional[str] = None) -> List[ShippingTask]:
        query = self.db.query(ShippingTask)
        if status:
            query = query.filter(ShippingTask.status == status)
        return query.order_by(ShippingTask.created_at.desc(), ShippingTask.id.desc()).all()
