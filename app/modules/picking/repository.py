# app/modules/picking/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from app.core.workflow import PickingTaskStatus
from app.shared.database.models import PickingTask, PickingItem, Order, picking_task_orders

class PickingRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_task(self, orders: List[Order], items_data: List[dict], assigned_to: Optional[str]) -> PickingTask:
        task = PickingTask(assigned_to=assigned_to, status=PickingTaskStatus.CREATED.value)
        task.orders = list(orders)
        task.items = [PickingItem(**item) for item in items_data]
        self.db.add(task)
        self.db.flush()
        return task
    
    def get_by_id(self, task_id: int) -> Optional[PickingTask]:
        return self.db.query(PickingTask)\
            .options(selectinload(PickingTask.items), selectinload(PickingTask.orders))\
            .filter(PickingTask.id == task_id)\
            .first()
    
    def list_tasks(self, status: Optional[str] = None) -> List[PickingTask]:
        query = self.db.query(PickingTask)\
            .options(selectinload(PickingTask.items), selectinload(PickingTask.orders))
        if status:
            query = query.filter(PickingTask.status == status)
        return query.order_by(PickingTask.created_at.desc(), PickingTask.id.desc()).all()
    
    def find_completed_for_order(self, order_id: int) -> List[PickingTask]:
        """Tareas completadas que incluyen el pedido, por id ascendente"""
        return self.db.query(PickingTask)\
            .join(picking_task_orders, picking_task_orders.c.picking_task_id == PickingTask.id)\
            .filter(
                picking_task_orders.c.order_id == order_id,
                PickingTask.status == PickingTaskStatus.COMPLETED.value
            )\
            .order_by(PickingTask.id)\
            .all()
