# app/modules/shipping/service.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.core.workflow import OrderStatus, TaskStatus, ensure_status, ensure_transition
from app.modules.orders.service import OrderService
from app.modules.packing.service import PackingService
from app.shared.database.models import ShippingTask
from app.shared.database.transaction import atomic
from .repository import ShippingRepository
from .schemas import ShippingTaskCreate

logger = logging.getLogger(__name__)

class ShippingService:
    """
    Despacho de pedidos empacados
    """
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = ShippingRepository(db)
        self.orders = OrderService(db)
        self.packing = PackingService(db)
    
    def list_tasks(self, status: Optional[TaskStatus] = None) -> List[ShippingTask]:
        return self.repository.list_tasks(status.value if status else None)
    
    def get_task(self, task_id: int) -> ShippingTask:
        task = self.repository.get_by_id(task_id)
        if not task:
            raise NotFoundError("Tarea de despacho no encontrada", details={"shipping_task_id": task_id})
        return task
    
    def create_task(self, task_data: ShippingTaskCreate) -> ShippingTask:
        order = self.orders.get_order(task_data.order_id)
        ensure_status("order", order.status, OrderStatus.PACKED)
        packing_task = self.packing.get_task(task_data.packing_task_id)
        ensure_status("packing_task", packing_task.status, TaskStatus.COMPLETED)
        
        if packing_task.order_id != order.id:
            raise ValidationError(
                "La tarea de empaque no pertenece al pedido",
                details={
                    "order_id": order.id,
                    "packing_task_id": packing_task.id,
                    "packing_task_order_id": packing_task.order_id
                }
            )
        
        with atomic(self.db):
            task = self.repository.create_task({
                "order_id": order.id,
                "packing_task_id": packing_task.id,
                "assigned_to": task_data.assigned_to,
                "shipping_method": task_data.shipping_method,
                "carrier": task_data.carrier,
                "shipping_name": order.customer_name,
                "shipping_address": order.customer_address,
                "shipping_phone": order.customer_phone,
                "shipping_email": order.customer_email,
                "status": TaskStatus.CREATED.value
            })
            order.status = OrderStatus.SHIPPING.value
        
        logger.info(f"Tarea de despacho {task.id} creada para pedido {order.order_number}")
        return task
    
    def start_task(self, task_id: int) -> ShippingTask:
        task = self.get_task(task_id)
        ensure_status("shipping_task", task.status, TaskStatus.CREATED)
        
        with atomic(self.db):
            task.status = TaskStatus.IN_PROGRESS.value
            task.started_at = datetime.now()
        
        return task
    
    def complete_task(self, task_id: int, tracking_number: str, shipping_cost: Optional[Decimal] = None) -> ShippingTask:
        task = self.get_task(task_id)
        ensure_status("shipping_task", task.status, TaskStatus.IN_PROGRESS)
        if not tracking_number.strip():
            raise ValidationError("El número de guía es obligatorio")
        order = self.orders.get_order(task.order_id)
        ensure_transition("order", order.status, OrderStatus.SHIPPED)
        
        with atomic(self.db):
            task.status = TaskStatus.COMPLETED.value
            task.completed_at = datetime.now()
            task.tracking_number = tracking_number.strip()
            if shipping_cost is not None:
                task.shipping_cost = shipping_cost
            order.status = OrderStatus.SHIPPED.value
        
        logger.info(f"Pedido {order.order_number} despachado, guía {task.tracking_number}")
        return task
    
    def cancel_task(self, task_id: int, reason: Optional[str] = None) -> ShippingTask:
        """Cancelar despacho; el pedido vuelve a `packed`"""
        task = self.get_task(task_id)
        ensure_transition("shipping_task", task.status, TaskStatus.CANCELLED)
        order = self.orders.get_order(task.order_id)
        ensure_transition("order", order.status, OrderStatus.PACKED)
        
        with atomic(self.db):
            task.status = TaskStatus.CANCELLED.value
            task.cancellation_reason = reason
            order.status = OrderStatus.PACKED.value
        
        logger.warning(f"Despacho {task.id} del pedido {order.order_number} cancelado: {reason}")
        return task
