# app/modules/inventory/service.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import CapacityError, NotFoundError
from app.core.workflow import InvoiceItemStatus, ensure_status
from app.modules.locations.service import LocationService
from app.modules.placement_carts.repository import PlacementCartRepository
from app.modules.placement_carts.service import PlacementCartService
from app.modules.products.repository import ProductRepository
from app.modules.receiving.service import ReceivingService
from app.shared.database.models import InventoryRecord
from app.shared.database.transaction import atomic
from .repository import InventoryRepository
from .schemas import AdjustmentReport, PlaceItemResponse

logger = logging.getLogger(__name__)

class InventoryService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = InventoryRepository(db)
        self.locations = LocationService(db)
        self.receiving = ReceivingService(db)
        self.placement_carts = PlacementCartService(db)
        self.placement_cart_repository = PlacementCartRepository(db)
        self.product_repository = ProductRepository(db)
    
    def list_inventory(self, sku: Optional[str] = None, location_id: Optional[int] = None) -> List[InventoryRecord]:
        return self.repository.list_records(sku, location_id)
    
    def get_stock(self, sku: str) -> int:
        """Stock total de un SKU sumando todas sus filas"""
        return self.repository.get_stock(sku)
    
    def place_item(self, invoice_id: int, item_id: int, location_id: int, quantity: int) -> PlaceItemResponse:
        """
        Ubicar mercancía contada de una factura en una celda.
        
        Validaciones (antes de escribir nada):
        - El ítem debe estar contado
        - No se puede ubicar más de lo contado
        - La ubicación debe tener capacidad libre suficiente
        
        En la misma transacción se agrega la fila al libro, se ocupa la
        ubicación, se actualiza el ítem y se descarga el carro de acomodo.
        """
        invoice = self.receiving.get_invoice(invoice_id)
        item = self.receiving.find_item(invoice, item_id)
        ensure_status("invoice_item", item.status, InvoiceItemStatus.COUNTED)
        
        pending = item.actual_quantity - item.placed_quantity
        if quantity > pending:
            raise CapacityError(
                "Cantidad mayor a la pendiente de ubicar",
                details={"requested": quantity, "available": pending}
            )
        
        location = self.locations.get_location(location_id)
        if quantity > location.free_capacity:
            raise CapacityError(
                "Capacidad insuficiente en la ubicación",
                details={"requested": quantity, "available": location.free_capacity}
            )
        
        with atomic(self.db):
            record = self.repository.create_record({
                "invoice_id": invoice.id,
                "invoice_item_id": item.id,
                "sku": item.sku,
                "quantity": quantity,
                "location_id": location.id,
                "status": "placed"
            })
            location.occupy(quantity)
            item.placed_quantity += quantity
            
            if item.placement_cart_id:
                cart = self.placement_cart_repository.get_by_id(item.placement_cart_id)
                if cart:
                    self.placement_carts.register_placement(cart, item, quantity)
        
        logger.info(f"Acomodo: {quantity} x {item.sku} en {location.barcode}")
        return PlaceItemResponse(
            message="Mercancía ubicada",
            inventory=record,
            location=location,
            item=item
        )
    
    def adjust_inventory(self, sku: str, location_id: int, actual_quantity: int) -> AdjustmentReport:
        """Conciliar el conteo físico de un SKU en una ubicación"""
        if not self.product_repository.get_by_sku(sku):
            raise NotFoundError("Producto no encontrado", details={"sku": sku})
        location = self.locations.get_location(location_id)
        
        records = self.repository.get_records(sku, location_id)
        previous = sum(r.quantity for r in records)
        delta = actual_quantity - previous
        
        if delta > location.free_capacity:
            raise CapacityError(
                "El ajuste excede la capacidad de la ubicación",
                details={"requested": delta, "available": location.free_capacity}
            )
        
        with atomic(self.db):
            if records:
                kept, duplicates = records[0], records[1:]
                kept.quantity = actual_quantity
                for record in duplicates:
                    self.repository.delete_record(record)
            else:
                self.repository.create_record({
                    "sku": sku,
                    "quantity": actual_quantity,
                    "location_id": location.id,
                    "status": "placed"
                })
            
            if delta > 0:
                location.occupy(delta)
            elif delta < 0:
                location.release(-delta)
        
        logger.warning(
            f"Ajuste de inventario {sku} en {location.barcode}: "
            f"{previous} -> {actual_quantity} (delta {delta})"
        )
        return AdjustmentReport(
            sku=sku,
            location_id=location.id,
            previous_quantity=previous,
            actual_quantity=actual_quantity,
            delta=delta,
            location_used_capacity=location.used_capacity,
            location_status=location.status
        )
