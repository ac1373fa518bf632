from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.config.settings import settings
from app.core.exceptions import WMSError
import logging
import time
import uuid

logger = logging.getLogger(__name__)

def setup_middleware(app: FastAPI):
    """CORS para los clientes del almacén y log de cada request"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type", 
            "Accept",
            "Origin",
            "X-Requested-With",
            "X-Request-ID"
        ],
        expose_headers=["X-Request-ID", "X-Process-Time-Ms"],
        max_age=3600
    )
    
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        start_time = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time-Ms"] = f"{elapsed_ms:.1f}"
        log = logger.warning if response.status_code >= 400 else logger.info
        log(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")

        return response

def setup_exception_handlers(app: FastAPI):
    """Traducir errores a cuerpos JSON uniformes"""

    @app.exception_handler(WMSError)
    async def wms_error_handler(request: Request, exc: WMSError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} - {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, **exc.details}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
                "message": err.get("msg")
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"error": "Datos de entrada inválidos", "details": errors}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Error no controlado en {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": f"Error interno del servidor: {exc}"}
        )
