# app/modules/picking_carts/service.py
import logging
import time
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.core.workflow import PickingCartStatus, parse_status
from app.shared.database.models import PickingCart
from app.shared.database.transaction import atomic
from .repository import PickingCartRepository

logger = logging.getLogger(__name__)

class PickingCartService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = PickingCartRepository(db)
    
    def create_cart(self, barcode: Optional[str] = None) -> PickingCart:
        barcode = barcode or f"PICK-CART-{int(time.time() * 1000)}"
        if self.repository.get_by_barcode(barcode):
            raise ValidationError(
                "Ya existe un carro con este código de barras",
                details={"barcode": barcode}
            )
        
        with atomic(self.db):
            cart = self.repository.create_cart(barcode)
        
        logger.info(f"Carro de picking creado: {barcode}")
        return self.get_cart(cart.id)
    
    def list_carts(self, status: Optional[PickingCartStatus] = None) -> List[PickingCart]:
        return self.repository.list_carts(status.value if status else None)
    
    def get_cart(self, cart_id: int) -> PickingCart:
        cart = self.repository.get_by_id(cart_id)
        if not cart:
            raise NotFoundError("Carro de picking no encontrado", details={"picking_cart_id": cart_id})
        return cart
    
    def update_status(self, cart_id: int, status: str) -> PickingCart:
        """
        Sobrescritura manual del estado del carro.
        
        Pasar a `free` desvincula tarea y responsable y vacía el carro.
        """
        new_status = parse_status(PickingCartStatus, status)
        cart = self.get_cart(cart_id)
        
        with atomic(self.db):
            if new_status == PickingCartStatus.FREE:
                cart.release()
            else:
                cart.status = new_status.value
        
        logger.info(f"Carro {cart.barcode}: estado -> {new_status.value}")
        return cart
