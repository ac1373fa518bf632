# app/modules/orders/service.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import CapacityError, NotFoundError, ValidationError
from app.core.workflow import (
    OrderStatus, OrderItemStatus, ensure_status, ensure_transition, parse_status
)
from app.modules.inventory.repository import InventoryRepository
from app.modules.products.repository import ProductRepository
from app.shared.database.models import Order
from app.shared.database.transaction import atomic
from .repository import OrderRepository
from .schemas import OrderCreate, ItemAvailability, ReservationResponse

logger = logging.getLogger(__name__)

class OrderService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = OrderRepository(db)
        self.product_repository = ProductRepository(db)
        self.inventory_repository = InventoryRepository(db)
    
    def create_order(self, order_data: OrderCreate) -> Order:
        """
        Crear pedido
        
        Cada SKU debe existir en el catálogo; id y nombre del producto se
        copian a la línea del pedido.
        """
        if self.repository.get_by_number(order_data.order_number):
            raise ValidationError(
                "Ya existe un pedido con este número",
                details={"order_number": order_data.order_number}
            )
        
        items_data = []
        for item in order_data.items:
            product = self.product_repository.get_by_sku(item.sku)
            if not product:
                raise ValidationError(
                    f"Producto con SKU {item.sku} no encontrado",
                    details={"sku": item.sku}
                )
            items_data.append({
                "product_id": product.id,
                "sku": product.sku,
                "name": product.name,
                "quantity": item.quantity,
                "picked_quantity": 0,
                "status": OrderItemStatus.PENDING.value
            })
        
        customer = order_data.customer
        with atomic(self.db):
            order = self.repository.create_order(
                {
                    "order_number": order_data.order_number,
                    "external_order_id": order_data.external_order_id,
                    "customer_name": customer.name if customer else None,
                    "customer_address": customer.address if customer else None,
                    "customer_phone": customer.phone if customer else None,
                    "customer_email": customer.email if customer else None,
                    "priority": order_data.priority,
                    "status": OrderStatus.NEW.value
                },
                items_data
            )
        
        logger.info(f"Pedido {order.order_number} creado con {len(items_data)} líneas")
        return self.get_order(order.id)
    
    def list_orders(self, status: Optional[OrderStatus] = None) -> List[Order]:
        return self.repository.list_orders(status.value if status else None)
    
    def get_order(self, order_id: int) -> Order:
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFoundError("Pedido no encontrado", details={"order_id": order_id})
        return order
    
    def update_status(self, order_id: int, status: str) -> Order:
        """Sobrescritura directa del estado (solo valida que exista el valor)"""
        new_status = parse_status(OrderStatus, status)
        order = self.get_order(order_id)
        previous = order.status
        
        with atomic(self.db):
            order.status = new_status.value
        
        logger.info(f"Pedido {order.order_number}: estado {previous} -> {new_status.value}")
        return order
    
    def reserve_items(self, order_id: int) -> ReservationResponse:
        """
        Reservar stock para todas las líneas del pedido.
        
        Si alguna línea no tiene stock suficiente no se reserva nada y el
        error lista todas las líneas insuficientes.
        """
        order = self.get_order(order_id)
        ensure_status("order", order.status, OrderStatus.NEW)
        
        results = []
        for item in order.items:
            available = self.inventory_repository.get_stock(item.sku)
            results.append(ItemAvailability(
                sku=item.sku,
                required=item.quantity,
                available=available,
                status="reserved" if available >= item.quantity else "insufficient"
            ))
        
        insufficient = [r for r in results if r.status == "insufficient"]
        if insufficient:
            raise CapacityError(
                "Inventario insuficiente para algunos ítems",
                details={
                    "items": [
                        r.model_dump(include={"sku", "required", "available"})
                        for r in insufficient
                    ]
                }
            )
        
        for item in order.items:
            ensure_transition("order_item", item.status, OrderItemStatus.RESERVED)
        
        with atomic(self.db):
            for item in order.items:
                item.status = OrderItemStatus.RESERVED.value
            order.status = OrderStatus.PROCESSING.value
        
        logger.info(f"Pedido {order.order_number} reservado")
        return ReservationResponse(
            message="Ítems reservados correctamente",
            order=order,
            items=results
        )
