# app/modules/picking_carts/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from app.core.workflow import PickingCartStatus
from app.shared.database.models import PickingCart, PickingCartItem

class PickingCartRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_cart(self, barcode: str) -> PickingCart:
        cart = PickingCart(barcode=barcode)
        self.db.add(cart)
        self.db.flush()
        return cart
    
    def get_by_id(self, cart_id: int) -> Optional[PickingCart]:
        return self.db.query(PickingCart)\
            .options(selectinload(PickingCart.items))\
            .filter(PickingCart.id == cart_id)\
            .first()
    
    def get_by_barcode(self, barcode: str) -> Optional[PickingCart]:
        return self.db.query(PickingCart).filter(PickingCart.barcode == barcode).first()
    
    def list_carts(self, status: Optional[str] = None) -> List[PickingCart]:
        query = self.db.query(PickingCart).options(selectinload(PickingCart.items))
        if status:
            query = query.filter(PickingCart.status == status)
        return query.order_by(PickingCart.id).all()
    
    def find_complete_for_task(self, picking_task_id: int) -> List[PickingCart]:
        return self.db.query(PickingCart)\
            .filter(
                PickingCart.status == PickingCartStatus.COMPLETE.value,
                PickingCart.picking_task_id == picking_task_id
            )\
            .order_by(PickingCart.id)\
            .all()
    
    def find_complete_for_order(self, order_id: int) -> List[PickingCart]:
        """Carros completos que llevan mercancía del pedido"""
        return self.db.query(PickingCart)\
            .join(PickingCartItem, PickingCartItem.cart_id == PickingCart.id)\
            .filter(
                PickingCart.status == PickingCartStatus.COMPLETE.value,
                PickingCartItem.order_id == order_id
            )\
            .distinct()\
            .order_by(PickingCart.id)\
            .all()
