# app/modules/products/service.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.shared.database.models import Product
from app.shared.database.transaction import atomic
from .repository import ProductRepository
from .schemas import (
    ProductCreate, ProductDetail, ProductStockLocation,
    ProductWithStock, LocationInfo
)

logger = logging.getLogger(__name__)

class ProductService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductRepository(db)
    
    def create_product(self, product_data: ProductCreate) -> Product:
        if self.repository.get_by_sku(product_data.sku):
            raise ValidationError(
                "Ya existe un producto con este SKU",
                details={"sku": product_data.sku}
            )
        
        data = product_data.model_dump(exclude={"dimensions"}, exclude_none=True)
        if product_data.dimensions:
            data.update(product_data.dimensions.model_dump(exclude_none=True))
        
        with atomic(self.db):
            product = self.repository.create_product(data)
        
        self.db.refresh(product)
        logger.info(f"Producto creado: {product.sku}")
        return product
    
    def list_products(self, category: Optional[str] = None, in_stock: bool = False) -> List[ProductWithStock]:
        """Listado con stock total; con `in_stock` solo productos con stock positivo"""
        products = self.repository.list_products(category)
        stock = self.repository.get_stock_by_skus([p.sku for p in products])
        
        result = []
        for product in products:
            quantity = stock.get(product.sku, 0)
            if in_stock and quantity <= 0:
                continue
            item = ProductWithStock.model_validate(product)
            item.stock_quantity = quantity
            result.append(item)
        return result
    
    def get_product(self, product_id: int) -> ProductDetail:
        """Producto con stock total y desglose por ubicación"""
        product = self.repository.get_by_id(product_id)
        if not product:
            raise NotFoundError("Producto no encontrado", details={"product_id": product_id})
        
        records = self.repository.get_inventory_records(product.sku)
        
        detail = ProductDetail.model_validate(product)
        detail.stock_quantity = sum(r.quantity for r in records)
        detail.locations = [
            ProductStockLocation(
                location_id=r.location_id,
                quantity=r.quantity,
                location_info=LocationInfo(
                    barcode=r.location.barcode,
                    zone=r.location.zone,
                    aisle=r.location.aisle,
                    rack=r.location.rack,
                    level=r.location.level,
                    position=r.location.position
                ) if r.location else None
            ) for r in records
        ]
        return detail
    
    def get_by_barcode(self, barcode: str) -> Product:
        product = self.repository.get_by_barcode(barcode)
        if not product:
            raise NotFoundError("Producto no encontrado", details={"barcode": barcode})
        return product
