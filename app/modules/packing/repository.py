# app/modules/packing/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session

from app.shared.database.models import PackingTask

class PackingRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_task(self, task_data: dict) -> PackingTask:
        task = PackingTask(**task_data)
        self.db.add(task)
        self.db.flush()
        return task
    
    def get_by_id(self, task_id: int) -> Optional[PackingTask]:
        return self.db.query(PackingTask).filter(PackingTask.id == task_id).first()
    
    def list_tasks(self, status: Optional[str] = None) -> List[PackingTask]:
        query = self.db.query(PackingTask)
        if status:
            query = query.filter(PackingTask.status == status)
        return query.order_by(PackingTask.created_at.desc(), PackingTask.id.desc()).all()
