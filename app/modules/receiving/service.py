# app/modules/receiving/service.py
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError, InvalidTransitionError
from app.core.workflow import (
    InvoiceStatus, InvoiceItemStatus, ensure_status, ensure_transition
)
from app.modules.placement_carts.service import PlacementCartService
from app.modules.products.repository import ProductRepository
from app.shared.database.models import Invoice, InvoiceItem
from app.shared.database.transaction import atomic
from .repository import ReceivingRepository
from .schemas import InvoiceCreate, InvoiceCompletionResponse, Discrepancy

logger = logging.getLogger(__name__)

class ReceivingService:
    """
    Flujo de recepción: factura -> escaneo -> conteo -> cierre.

    Cada operación valida primero todos los estados y después aplica los
    cambios en una sola transacción; si una guarda falla no se modifica nada.
    """
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = ReceivingRepository(db)
        self.product_repository = ProductRepository(db)
        self.placement_carts = PlacementCartService(db)
    
    def create_invoice(self, invoice_data: InvoiceCreate) -> Invoice:
        if self.repository.get_by_number(invoice_data.invoice_number):
            raise ValidationError(
                "Ya existe una factura con este número",
                details={"invoice_number": invoice_data.invoice_number}
            )
        
        items_data = [
            item.model_dump(exclude={"category"})
            for item in invoice_data.items
        ]
        
        with atomic(self.db):
            self._register_unknown_products(invoice_data)
            invoice = self.repository.create_invoice(
                {
                    "invoice_number": invoice_data.invoice_number,
                    "barcode": invoice_data.barcode,
                    "status": InvoiceStatus.NEW.value
                },
                [
                    {**item, "status": InvoiceItemStatus.PENDING.value}
                    for item in items_data
                ]
            )
        
        logger.info(f"Factura {invoice.invoice_number} creada con {len(items_data)} ítems")
        return self.get_invoice(invoice.id)
    
    def list_invoices(self, status: Optional[InvoiceStatus] = None) -> List[Invoice]:
        return self.repository.list_invoices(status.value if status else None)
    
    def get_invoice(self, invoice_id: int) -> Invoice:
        invoice = self.repository.get_by_id(invoice_id)
        if not invoice:
            raise NotFoundError("Factura no encontrada", details={"invoice_id": invoice_id})
        return invoice
    
    def scan_invoice(self, invoice_id: int) -> Invoice:
        invoice = self.get_invoice(invoice_id)
        ensure_transition("invoice", invoice.status, InvoiceStatus.IN_PROGRESS)
        
        with atomic(self.db):
            invoice.status = InvoiceStatus.IN_PROGRESS.value
        
        logger.info(f"Factura {invoice.invoice_number} escaneada")
        return invoice
    
    def scan_item(self, invoice_id: int, item_id: int, barcode: str) -> InvoiceItem:
        invoice = self.get_invoice(invoice_id)
        ensure_status("invoice", invoice.status, [InvoiceStatus.NEW, InvoiceStatus.IN_PROGRESS])
        item = self.find_item(invoice, item_id)
        ensure_transition("invoice_item", item.status, InvoiceItemStatus.SCANNED)
        
        if item.barcode and barcode != item.barcode:
            raise ValidationError(
                "El código de barras no coincide con el ítem",
                details={"expected": item.barcode, "received": barcode}
            )
        
        with atomic(self.db):
            if invoice.status == InvoiceStatus.NEW.value:
                invoice.status = InvoiceStatus.IN_PROGRESS.value
            item.status = InvoiceItemStatus.SCANNED.value
        
        logger.info(f"Ítem {item.sku} escaneado en factura {invoice.invoice_number}")
        return item
    
    def count_item(
        self,
        invoice_id: int,
        item_id: int,
        actual_quantity: int,
        placement_cart_id: Optional[int] = None
    ) -> InvoiceItem:
        invoice = self.get_invoice(invoice_id)
        ensure_status("invoice", invoice.status, InvoiceStatus.IN_PROGRESS)
        item = self.find_item(invoice, item_id)
        ensure_transition("invoice_item", item.status, InvoiceItemStatus.COUNTED)
        
        cart = None
        if placement_cart_id is not None:
            cart = self.placement_carts.get_cart(placement_cart_id)
            if actual_quantity == 0:
                raise ValidationError(
                    "No se puede cargar en un carro un ítem contado en cero",
                    details={"item_id": item.id, "placement_cart_id": cart.id}
                )
        
        with atomic(self.db):
            item.actual_quantity = actual_quantity
            item.status = InvoiceItemStatus.COUNTED.value
            if cart:
                self.placement_carts.stage_item(cart, item, actual_quantity)
        
        logger.info(
            f"Ítem {item.sku} contado: {actual_quantity} "
            f"(esperado {item.expected_quantity})"
        )
        return item
    
    def complete_invoice(self, invoice_id: int) -> InvoiceCompletionResponse:
        invoice = self.get_invoice(invoice_id)
        ensure_status("invoice", invoice.status, InvoiceStatus.IN_PROGRESS)
        
        uncounted = [
            {"item_id": item.id, "sku": item.sku, "status": item.status}
            for item in invoice.items
            if item.status != InvoiceItemStatus.COUNTED.value
        ]
        if uncounted:
            raise InvalidTransitionError(
                "Hay ítems sin contar en la factura",
                details={"uncounted_items": uncounted}
            )
        
        discrepancies = [
            Discrepancy(
                item_id=item.id,
                sku=item.sku,
                expected_quantity=item.expected_quantity,
                actual_quantity=item.actual_quantity,
                difference=item.actual_quantity - item.expected_quantity
            )
            for item in invoice.items
            if item.actual_quantity != item.expected_quantity
        ]
        target = (
            InvoiceStatus.ACCEPTED_WITH_DISCREPANCIES if discrepancies
            else InvoiceStatus.ACCEPTED
        )
        ensure_transition("invoice", invoice.status, target)
        
        with atomic(self.db):
            invoice.status = target.value
            invoice.completed_at = datetime.now()
        
        logger.info(f"Factura {invoice.invoice_number} cerrada como {target.value}")
        return InvoiceCompletionResponse(
            message="Factura completada",
            invoice=invoice,
            discrepancies=discrepancies
        )
    
    # ===== AUXILIARES =====
    
    def find_item(self, invoice: Invoice, item_id: int) -> InvoiceItem:
        item = next((i for i in invoice.items if i.id == item_id), None)
        if not item:
            raise NotFoundError(
                "Ítem no encontrado en la factura",
                details={"invoice_id": invoice.id, "item_id": item_id}
            )
        return item
    
    def _register_unknown_products(self, invoice_data: InvoiceCreate) -> None:
        """Dar de alta en el catálogo los SKUs que aún no existen"""
        seen = set()
        for item in invoice_data.items:
            if item.sku in seen or self.product_repository.get_by_sku(item.sku):
                seen.add(item.sku)
                continue
            seen.add(item.sku)
            data = {
                "sku": item.sku,
                "product_id": item.product_id,
                "name": item.name,
                "barcode": item.barcode,
            }
            if item.category:
                data["category"] = item.category
            self.product_repository.create_product(data)
            logger.info(f"SKU {item.sku} registrado en el catálogo")
