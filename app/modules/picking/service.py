# app/modules/picking/service.py
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import CapacityError, NotFoundError, ValidationError
from app.core.workflow import (
    OrderStatus, OrderItemStatus, PickingTaskStatus, PickingItemStatus,
    PickingCartStatus, ensure_status, ensure_transition
)
from app.modules.inventory.repository import InventoryRepository
from app.modules.locations.service import LocationService
from app.modules.orders.repository import OrderRepository
from app.modules.orders.service import OrderService
from app.modules.picking_carts.schemas import PickingCartSummary
from app.modules.picking_carts.service import PickingCartService
from app.shared.database.models import PickingTask, PickingItem, PickingCart, PickingCartItem
from app.shared.database.transaction import atomic
from .repository import PickingRepository
from .schemas import (
    PickingTaskCreate, StartPickingResponse, PickItemResponse, InventoryRemaining
)

logger = logging.getLogger(__name__)

class PickingService:
    """
    Recolección de pedidos reservados.

    El stock no se descuenta al crear la tarea sino al recolectar: cada
    `pick_item` baja la fila del libro, libera capacidad de la ubicación
    y carga el carro en una sola transacción.
    """
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = PickingRepository(db)
        self.order_repository = OrderRepository(db)
        self.orders = OrderService(db)
        self.inventory_repository = InventoryRepository(db)
        self.locations = LocationService(db)
        self.picking_carts = PickingCartService(db)
    
    def list_tasks(self, status: Optional[PickingTaskStatus] = None) -> List[PickingTask]:
        return self.repository.list_tasks(status.value if status else None)
    
    def get_task(self, task_id: int) -> PickingTask:
        task = self.repository.get_by_id(task_id)
        if not task:
            raise NotFoundError("Tarea de picking no encontrada", details={"picking_task_id": task_id})
        return task
    
    def create_task(self, task_data: PickingTaskCreate) -> PickingTask:
        order_ids = list(dict.fromkeys(task_data.order_ids))
        orders = self.order_repository.get_by_ids(order_ids)
        
        found = {o.id for o in orders}
        missing = [oid for oid in order_ids if oid not in found]
        if missing:
            raise ValidationError(
                "Algunos pedidos no existen",
                details={"missing_order_ids": missing}
            )
        
        for order in orders:
            ensure_status("order", order.status, OrderStatus.PROCESSING)
            ensure_transition("order", order.status, OrderStatus.PICKING)
        
        # Ubicación con más stock para cada línea reservada
        items_data = []
        for order in orders:
            for item in order.items:
                if item.status != OrderItemStatus.RESERVED.value:
                    continue
                record = self.inventory_repository.get_largest_record(item.sku)
                if not record:
                    raise CapacityError(
                        f"Sin stock disponible para el SKU {item.sku}",
                        details={"order_id": order.id, "sku": item.sku}
                    )
                items_data.append({
                    "order_id": order.id,
                    "order_item_id": item.id,
                    "product_id": item.product_id,
                    "sku": item.sku,
                    "name": item.name,
                    "quantity": item.quantity,
                    "picked_quantity": 0,
                    "location_id": record.location_id,
                    "status": PickingItemStatus.PENDING.value
                })
        
        with atomic(self.db):
            for order in orders:
                order.status = OrderStatus.PICKING.value
            task = self.repository.create_task(orders, items_data, task_data.assigned_to)
        
        logger.info(f"Tarea de picking {task.id} creada para pedidos {order_ids} ({len(items_data)} líneas)")
        return self.get_task(task.id)
    
    def start_task(self, task_id: int, picking_cart_id: int) -> StartPickingResponse:
        task = self.get_task(task_id)
        ensure_transition("picking_task", task.status, PickingTaskStatus.IN_PROGRESS)
        cart = self.picking_carts.get_cart(picking_cart_id)
        ensure_status("picking_cart", cart.status, PickingCartStatus.FREE)
        
        with atomic(self.db):
            cart.status = PickingCartStatus.ASSIGNED.value
            cart.picking_task_id = task.id
            cart.assigned_to = task.assigned_to
            task.status = PickingTaskStatus.IN_PROGRESS.value
            task.started_at = datetime.now()
        
        logger.info(f"Tarea de picking {task.id} iniciada con carro {cart.barcode}")
        return StartPickingResponse(task=task, picking_cart=cart)
    
    def scan_location(self, task_id: int, picking_item_id: int, location_barcode: str) -> PickingItem:
        task = self.get_task(task_id)
        ensure_status("picking_task", task.status, PickingTaskStatus.IN_PROGRESS)
        item = self._get_item(task, picking_item_id)
        ensure_transition("picking_item", item.status, PickingItemStatus.IN_PROGRESS)
        location = self.locations.get_location(item.location_id)
        
        if location.barcode != location_barcode:
            raise ValidationError(
                "El código de la ubicación no coincide",
                details={"expected": location.barcode, "received": location_barcode}
            )
        
        with atomic(self.db):
            item.status = PickingItemStatus.IN_PROGRESS.value
        
        return item
    
    def pick_item(self, task_id: int, picking_item_id: int, quantity: int, picking_cart_id: int) -> PickItemResponse:
        """
        Recolectar `quantity` unidades de una línea.
        
        Guardas: línea en curso, carro asignado o en uso (y de esta tarea),
        cantidad dentro de lo pendiente y stock suficiente en la fila con
        más unidades del SKU en la ubicación de la línea.
        """
        task = self.get_task(task_id)
        ensure_status("picking_task", task.status, PickingTaskStatus.IN_PROGRESS)
        item = self._get_item(task, picking_item_id)
        ensure_status("picking_item", item.status, PickingItemStatus.IN_PROGRESS)
        
        cart = self.picking_carts.get_cart(picking_cart_id)
        ensure_status("picking_cart", cart.status, [PickingCartStatus.ASSIGNED, PickingCartStatus.IN_USE])
        if cart.picking_task_id is not None and cart.picking_task_id != task.id:
            raise ValidationError(
                "El carro está asignado a otra tarea",
                details={"picking_cart_id": cart.id, "picking_task_id": cart.picking_task_id}
            )
        
        if quantity > item.remaining_quantity:
            raise CapacityError(
                "La cantidad excede lo pendiente de la línea",
                details={"requested": quantity, "remaining": item.remaining_quantity}
            )
        
        record = self.inventory_repository.get_largest_record(item.sku, item.location_id)
        if not record or record.quantity < quantity:
            raise CapacityError(
                "Inventario insuficiente en esta ubicación",
                details={"requested": quantity, "available": record.quantity if record else 0}
            )
        
        location = self.locations.get_location(item.location_id)
        order = self.orders.get_order(item.order_id)
        order_item = next(oi for oi in order.items if oi.id == item.order_item_id)
        
        with atomic(self.db):
            record.quantity -= quantity
            location.release(quantity)
            
            self._load_cart(cart, item, quantity)
            
            item.picked_quantity += quantity
            if item.remaining_quantity == 0:
                ensure_transition("picking_item", item.status, PickingItemStatus.PICKED)
                item.status = PickingItemStatus.PICKED.value
            
            order_item.picked_quantity += quantity
            if order_item.picked_quantity >= order_item.quantity:
                ensure_transition("order_item", order_item.status, OrderItemStatus.PICKED)
                order_item.status = OrderItemStatus.PICKED.value
            
            if all(oi.status == OrderItemStatus.PICKED.value for oi in order.items):
                ensure_transition("order", order.status, OrderStatus.PICKED)
                order.status = OrderStatus.PICKED.value
            
            if all(pi.status == PickingItemStatus.PICKED.value for pi in task.items):
                ensure_transition("picking_task", task.status, PickingTaskStatus.COMPLETED)
                task.status = PickingTaskStatus.COMPLETED.value
                task.completed_at = datetime.now()
                ensure_transition("picking_cart", cart.status, PickingCartStatus.COMPLETE)
                cart.status = PickingCartStatus.COMPLETE.value
        
        logger.info(
            f"Picking: {quantity} x {item.sku} de {location.barcode} "
            f"al carro {cart.barcode} (tarea {task.id})"
        )
        return PickItemResponse(
            picking_item=item,
            remaining_quantity=item.remaining_quantity,
            picking_cart=PickingCartSummary(
                id=cart.id,
                status=cart.status,
                item_count=len(cart.items)
            ),
            inventory=InventoryRemaining(remaining=record.quantity)
        )
    
    # ===== MÉTODOS PRIVADOS =====
    
    def _get_item(self, task: PickingTask, picking_item_id: int) -> PickingItem:
        item = next((i for i in task.items if i.id == picking_item_id), None)
        if not item:
            raise NotFoundError(
                "Línea de picking no encontrada",
                details={"picking_task_id": task.id, "picking_item_id": picking_item_id}
            )
        return item
    
    def _load_cart(self, cart: PickingCart, item: PickingItem, quantity: int) -> None:
        """Sumar al carro agrupando por (sku, pedido)"""
        existing = next(
            (ci for ci in cart.items if ci.sku == item.sku and ci.order_id == item.order_id),
            None
        )
        if existing:
            existing.quantity += quantity
        else:
            cart.items.append(PickingCartItem(sku=item.sku, quantity=quantity, order_id=item.order_id))
        
        ensure_transition("picking_cart", cart.status, PickingCartStatus.IN_USE)
        cart.status = PickingCartStatus.IN_USE.value
        if cart.picking_task_id is None:
            cart.picking_task_id = item.task_id
