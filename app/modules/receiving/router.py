# app/modules/receiving/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, WORKER_ROLES
from app.core.workflow import InvoiceStatus
from app.shared.database.models import User
from .service import ReceivingService
from .schemas import (
    InvoiceCreate, InvoiceResponse, InvoiceSummary, InvoiceItemResponse,
    ScanItemRequest, CountItemRequest, InvoiceCompletionResponse
)

router = APIRouter(prefix="/receiving", tags=["Receiving - Recepción"])

@router.get("", response_model=List[InvoiceSummary])
async def list_invoices(
    status: Optional[InvoiceStatus] = Query(None, description="Filtrar por estado"),
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceivingService(db)
    return service.list_invoices(status)

@router.post("", response_model=InvoiceResponse, status_code=201)
async def create_invoice(
    invoice_data: InvoiceCreate,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Registrar factura de proveedor
    
    Los SKUs que no existen en el catálogo se registran automáticamente.
    """
    service = ReceivingService(db)
    return service.create_invoice(invoice_data)

@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceivingService(db)
    return service.get_invoice(invoice_id)

@router.post("/{invoice_id}/scan", response_model=InvoiceResponse)
async def scan_invoice(
    invoice_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceivingService(db)
    return service.scan_invoice(invoice_id)

@router.post("/{invoice_id}/items/{item_id}/scan", response_model=InvoiceItemResponse)
async def scan_invoice_item(
    invoice_id: int,
    item_id: int,
    scan_data: ScanItemRequest,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceivingService(db)
    return service.scan_item(invoice_id, item_id, scan_data.barcode)

@router.post("/{invoice_id}/items/{item_id}/count", response_model=InvoiceItemResponse)
async def count_invoice_item(
    invoice_id: int,
    item_id: int,
    count_data: CountItemRequest,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    """Registrar cantidad real y, opcionalmente, cargarla en un carro de acomodo"""
    service = ReceivingService(db)
    return service.count_item(
        invoice_id, item_id, count_data.actual_quantity, count_data.placement_cart_id
    )

@router.post("/{invoice_id}/complete", response_model=InvoiceCompletionResponse)
async def complete_invoice(
    invoice_id: int,
    current_user: User = Depends(require_roles(WORKER_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceivingService(db)
    return service.complete_invoice(invoice_id)
