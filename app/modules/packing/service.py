# app/modules/packing/service.py
import logging
from datetime import datetime
from typing import List, Optional, Sequence, TypeVar
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.core.workflow import (
    LookupPolicy, OrderStatus, OrderItemStatus, PickingTaskStatus,
    PickingCartStatus, TaskStatus, ensure_status, ensure_transition
)
from app.modules.orders.service import OrderService
from app.modules.picking.repository import PickingRepository
from app.modules.picking.service import PickingService
from app.modules.picking_carts.repository import PickingCartRepository
from app.modules.picking_carts.service import PickingCartService
from app.shared.database.models import PackingTask
from app.shared.database.transaction import atomic
from .repository import PackingRepository
from .schemas import PackingTaskCreate, CompletePackingRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")

def select_candidate(candidates: Sequence[T], policy: LookupPolicy, entity: str) -> Optional[T]:
    """
    Elegir un candidato de una búsqueda implícita.

    Los candidatos llegan ordenados por id ascendente: `first` toma el
    primero, `most_recent` el último y `error_on_ambiguous` falla si hay
    más de uno.
    """
    if not candidates:
        return None
    if policy == LookupPolicy.ERROR_ON_AMBIGUOUS and len(candidates) > 1:
        raise ValidationError(
            f"Búsqueda ambigua de {entity}: hay varios candidatos",
            details={"entity": entity, "candidates": [c.id for c in candidates]}
        )
    if policy == LookupPolicy.FIRST:
        return candidates[0]
    return candidates[-1]

class PackingService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = PackingRepository(db)
        self.orders = OrderService(db)
        self.picking = PickingService(db)
        self.picking_repository = PickingRepository(db)
        self.picking_carts = PickingCartService(db)
        self.picking_cart_repository = PickingCartRepository(db)
    
    def list_tasks(self, status: Optional[TaskStatus] = None) -> List[PackingTask]:
        return self.repository.list_tasks(status.value if status else None)
    
    def get_task(self, task_id: int) -> PackingTask:
        task = self.repository.get_by_id(task_id)
        if not task:
            raise NotFoundError("Tarea de empaque no encontrada", details={"packing_task_id": task_id})
        return task
    
    def create_task(self, task_data: PackingTaskCreate) -> PackingTask:
        """
        Crear tarea de empaque para un pedido recolectado.
        
        La tarea de picking y el carro se validan si vienen en la petición;
        si no, se buscan según `lookup_policy`:
        - tareas de picking completadas que incluyen el pedido
        - carros completos de esa tarea, o con mercancía del pedido si no
          se resolvió ninguna tarea
        """
        order = self.orders.get_order(task_data.order_id)
        ensure_status("order", order.status, OrderStatus.PICKED)
        ensure_transition("order", order.status, OrderStatus.PACKING)
        policy = task_data.lookup_policy
        
        if task_data.picking_task_id is not None:
            picking_task = self.picking.get_task(task_data.picking_task_id)
            ensure_status("picking_task", picking_task.status, PickingTaskStatus.COMPLETED)
        else:
            picking_task = select_candidate(
                self.picking_repository.find_completed_for_order(order.id),
                policy, "picking_task"
            )
        
        if task_data.picking_cart_id is not None:
            cart = self.picking_carts.get_cart(task_data.picking_cart_id)
            ensure_status("picking_cart", cart.status, PickingCartStatus.COMPLETE)
        elif picking_task:
            cart = select_candidate(
                self.picking_cart_repository.find_complete_for_task(picking_task.id),
                policy, "picking_cart"
            )
        else:
            cart = select_candidate(
                self.picking_cart_repository.find_complete_for_order(order.id),
                policy, "picking_cart"
            )
        
        with atomic(self.db):
            task = self.repository.create_task({
                "order_id": order.id,
                "picking_task_id": picking_task.id if picking_task else None,
                "picking_cart_id": cart.id if cart else None,
                "assigned_to": task_data.assigned_to,
                "status": TaskStatus.CREATED.value
            })
            order.status = OrderStatus.PACKING.value
        
        logger.info(
            f"Tarea de empaque {task.id} para pedido {order.order_number} "
            f"(picking {task.picking_task_id}, carro {task.picking_cart_id})"
        )
        return task
    
    def start_task(self, task_id: int) -> PackingTask:
        task = self.get_task(task_id)
        ensure_status("packing_task", task.status, TaskStatus.CREATED)
        
        with atomic(self.db):
            task.status = TaskStatus.IN_PROGRESS.value
            task.started_at = datetime.now()
        
        return task
    
    def complete_task(self, task_id: int, package_data: CompletePackingRequest) -> PackingTask:
        task = self.get_task(task_id)
        ensure_status("packing_task", task.status, TaskStatus.IN_PROGRESS)
        order = self.orders.get_order(task.order_id)
        ensure_transition("order", order.status, OrderStatus.PACKED)
        cart = (
            self.picking_cart_repository.get_by_id(task.picking_cart_id)
            if task.picking_cart_id else None
        )
        
        with atomic(self.db):
            task.status = TaskStatus.COMPLETED.value
            task.completed_at = datetime.now()
            task.package_weight = package_data.weight
            task.package_type = package_data.package_type.value
            
            order.status = OrderStatus.PACKED.value
            for item in order.items:
                if item.status == OrderItemStatus.PICKED.value:
                    item.status = OrderItemStatus.PACKED.value
            
            if cart:
                cart.release()
        
        logger.info(f"Pedido {order.order_number} empacado ({package_data.package_type.value}, {package_data.weight})")
        if cart:
            logger.info(f"Carro {cart.barcode} liberado")
        return task
