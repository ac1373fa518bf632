# app/modules/receiving/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from app.shared.database.models import Invoice, InvoiceItem

class ReceivingRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_invoice(self, invoice_data: dict, items_data: List[dict]) -> Invoice:
        invoice = Invoice(**invoice_data)
        invoice.items = [InvoiceItem(**item) for item in items_data]
        self.db.add(invoice)
        self.db.flush()
        return invoice
    
    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        return self.db.query(Invoice)\
            .options(selectinload(Invoice.items))\
            .filter(Invoice.id == invoice_id)\
            .first()
    
    def get_by_number(self, invoice_number: str) -> Optional[Invoice]:
        return self.db.query(Invoice).filter(Invoice.invoice_number == invoice_number).first()
    
    def list_invoices(self, status: Optional[str] = None) -> List[Invoice]:
        query = self.db.query(Invoice)
        if status:
            query = query.filter(Invoice.status == status)
        return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()
