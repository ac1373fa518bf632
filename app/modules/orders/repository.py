# app/modules/orders/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from app.shared.database.models import Order, OrderItem

class OrderRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_order(self, order_data: dict, items_data: List[dict]) -> Order:
        order = Order(**order_data)
        order.items = [OrderItem(**item) for item in items_data]
        self.db.add(order)
        self.db.flush()
        return order
    
    def get_by_id(self, order_id: int) -> Optional[Order]:
        return self.db.query(Order)\
            .options(selectinload(Order.items))\
            .filter(Order.id == order_id)\
            .first()
    
    def get_by_ids(self, order_ids: List[int]) -> List[Order]:
        return self.db.query(Order)\
            .options(selectinload(Order.items))\
            .filter(Order.id.in_(order_ids))\
            .order_by(Order.id)\
            .all()
    
    def get_by_number(self, order_number: str) -> Optional[Order]:
        return self.db.query(Order).filter(Order.order_number == order_number).first()
    
    def list_orders(self, status: Optional[str] = None) -> List[Order]:
        """Pedidos del más reciente al más antiguo"""
        query = self.db.query(Order).options(selectinload(Order.items))
        if status:
            query = query.filter(Order.status == status)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()
