# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router

from app.config.settings import settings
from app.modules.products import products_router
from app.modules.locations import locations_router
from app.modules.receiving import receiving_router
from app.modules.placement_carts import placement_carts_router
from app.modules.inventory import inventory_router
from app.modules.orders import orders_router
from app.modules.picking import picking_router
from app.modules.picking_carts import picking_carts_router
from app.modules.packing import packing_router
from app.modules.shipping import shipping_router


# Crear router principal de la API v1
api_router = APIRouter()

# ==================== AUTENTICACIÓN ====================

api_router.include_router(auth_router, prefix="/auth", tags=["authentication"])

# ==================== MÓDULOS DEL ALMACÉN ====================

# Los prefijos de cada módulo se declaran en su propio router
api_router.include_router(products_router)
api_router.include_router(locations_router)
api_router.include_router(receiving_router)
api_router.include_router(placement_carts_router)
api_router.include_router(inventory_router)
api_router.include_router(orders_router)
api_router.include_router(picking_router)
api_router.include_router(picking_carts_router)
api_router.include_router(packing_router)
api_router.include_router(shipping_router)

# ==================== ENDPOINTS RAÍZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    prefix = settings.api_prefix
    return {
        "message": f"{settings.app_name} v1",
        "version": settings.version,
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "authentication": f"{prefix}/auth",
            "products": f"{prefix}/products",
            "locations": f"{prefix}/locations",
            "receiving": f"{prefix}/receiving",
            "placement_carts": f"{prefix}/placement-carts",
            "inventory": f"{prefix}/inventory",
            "orders": f"{prefix}/orders",
            "picking": f"{prefix}/picking",
            "picking_carts": f"{prefix}/picking-carts",
            "packing": f"{prefix}/packing",
            "shipping": f"{prefix}/shipping"
        }
    }

@api_router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version
    }
