# app/modules/placement_carts/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from app.shared.database.models import PlacementCart

class PlacementCartRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_cart(self) -> PlacementCart:
        cart = PlacementCart()
        self.db.add(cart)
        self.db.flush()
        return cart
    
    def get_by_id(self, cart_id: int) -> Optional[PlacementCart]:
        return self.db.query(PlacementCart)\
            .options(selectinload(PlacementCart.items))\
            .filter(PlacementCart.id == cart_id)\
            .first()
    
    def list_carts(self, status: Optional[str] = None) -> List[PlacementCart]:
        query = self.db.query(PlacementCart).options(selectinload(PlacementCart.items))
        if status:
            query = query.filter(PlacementCart.status == status)
        return query.order_by(PlacementCart.id.desc()).all()
