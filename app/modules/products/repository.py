# app/modules/products/repository.py
from typing import Dict, List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func

from app.shared.database.models import Product, InventoryRecord

class ProductRepository:
    """
    Repositorio del catálogo de productos
    """
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_product(self, product_data: dict) -> Product:
        """Agregar producto a la sesión (el commit lo hace el servicio)"""
        product = Product(**product_data)
        self.db.add(product)
        self.db.flush()
        return product
    
    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()
    
    def get_by_sku(self, sku: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.sku == sku).first()
    
    def get_by_barcode(self, barcode: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.barcode == barcode).first()
    
    def list_products(self, category: Optional[str] = None) -> List[Product]:
        query = self.db.query(Product)
        if category:
            query = query.filter(Product.category == category)
        return query.order_by(Product.id).all()
    
    def get_stock_by_skus(self, skus: List[str]) -> Dict[str, int]:
        """Stock total por SKU sumando todas las filas del inventario"""
        if not skus:
            return {}
        rows = self.db.query(
            InventoryRecord.sku,
            func.coalesce(func.sum(InventoryRecord.quantity), 0)
        ).filter(InventoryRecord.sku.in_(skus))\
         .group_by(InventoryRecord.sku)\
         .all()
        return {sku: int(total) for sku, total in rows}
    
    def get_inventory_records(self, sku: str) -> List[InventoryRecord]:
        return self.db.query(InventoryRecord)\
            .options(joinedload(InventoryRecord.location))\
            .filter(InventoryRecord.sku == sku)\
            .order_by(InventoryRecord.id)\
            .all()
