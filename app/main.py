import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.config.database import Base, engine
from app.core.logging import setup_logging
from app.core.middleware import setup_middleware, setup_exception_handlers
from app.api.v1.router import api_router
from app.shared.database import models  # noqa: F401

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings)
    logger.info(f"{settings.app_name} iniciando - versión {settings.version}")
    logger.info(f"Entorno: {'Development' if settings.debug else 'Production'}")
    logger.info(f"JWT {settings.algorithm}, expiración {settings.access_token_expire_minutes} min")
    
    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)
        logger.info("Tablas verificadas/creadas")
    
    yield
    
    # Shutdown
    logger.info(f"{settings.app_name} detenido")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="API de gestión de almacén: recepción, acomodo, inventario, pedidos, picking, empaque y despacho",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
setup_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix=settings.api_prefix)

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": f"{settings.app_name} - Sistema de Gestión de Almacén",
        "version": settings.version,
        "status": "running",
        "docs": "/docs",
        "api": settings.api_prefix
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
