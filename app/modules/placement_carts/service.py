# app/modules/placement_carts/service.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.core.workflow import PlacementCartStatus, ensure_transition
from app.shared.database.models import InvoiceItem, PlacementCart, PlacementCartItem
from app.shared.database.transaction import atomic
from .repository import PlacementCartRepository

logger = logging.getLogger(__name__)

class PlacementCartService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = PlacementCartRepository(db)
    
    def create_cart(self) -> PlacementCart:
        with atomic(self.db):
            cart = self.repository.create_cart()
        logger.info(f"Carro de acomodo creado: {cart.id}")
        return self.repository.get_by_id(cart.id)
    
    def list_carts(self, status: Optional[PlacementCartStatus] = None) -> List[PlacementCart]:
        return self.repository.list_carts(status.value if status else None)
    
    def get_cart(self, cart_id: int) -> PlacementCart:
        cart = self.repository.get_by_id(cart_id)
        if not cart:
            raise NotFoundError("Carro de acomodo no encontrado", details={"placement_cart_id": cart_id})
        return cart
    
    # ===== OPERACIONES INTERNAS (sin commit, se usan dentro de atomic) =====
    
    def stage_item(self, cart: PlacementCart, item: InvoiceItem, quantity: int) -> PlacementCartItem:
        """
        Cargar un ítem contado en el carro.

        Si el mismo ítem de la misma factura ya está en el carro se suma la
        cantidad; un carro libre pasa a `occupied`.
        """
        staged = next(
            (ci for ci in cart.items
             if ci.invoice_id == item.invoice_id and ci.invoice_item_id == item.id),
            None
        )
        if staged:
            staged.quantity += quantity
        else:
            staged = PlacementCartItem(
                invoice_id=item.invoice_id,
                invoice_item_id=item.id,
                sku=item.sku,
                quantity=quantity,
                placed_quantity=0
            )
            cart.items.append(staged)
        
        ensure_transition("placement_cart", cart.status, PlacementCartStatus.OCCUPIED)
        cart.status = PlacementCartStatus.OCCUPIED.value
        item.placement_cart_id = cart.id
        return staged
    
    def register_placement(self, cart: PlacementCart, item: InvoiceItem, quantity: int) -> None:
        """
        Descontar del carro lo que se acaba de ubicar.

        Cuando el ítem queda totalmente ubicado sale del carro y se borra su
        vínculo; un carro que queda vacío vuelve a `free`.
        """
        staged = next(
            (ci for ci in cart.items
             if ci.invoice_id == item.invoice_id and ci.invoice_item_id == item.id),
            None
        )
        if staged:
            staged.placed_quantity += quantity
        
        if item.placed_quantity < item.actual_quantity:
            return
        
        if staged:
            cart.items.remove(staged)
        item.placement_cart_id = None
        
        if not cart.items:
            ensure_transition("placement_cart", cart.status, PlacementCartStatus.FREE)
            cart.status = PlacementCartStatus.FREE.value
            logger.info(f"Carro de acomodo {cart.id} liberado")
