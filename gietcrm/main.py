"""
GietCRM API - Main Application Entry Point
CRM for field sales representatives over a hosted backend.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from gietcrm.core.backend import BackendClient
from gietcrm.core.config import settings
from gietcrm.core.exceptions import (
    AuthError,
    AuthorizationError,
    BackendError,
    ConfigurationError,
    CRMError,
    NotFoundError,
    ValidationError,
)
from gietcrm.api.v1.router import api_router


logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ConfigurationError: status.HTTP_503_SERVICE_UNAVAILABLE,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    BackendError: status.HTTP_502_BAD_GATEWAY,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates the backend client on startup and closes it on shutdown.
    """
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

    backend = BackendClient.from_settings(settings)
    if not backend.is_configured:
        logger.warning("GietCRM: faltan SUPABASE_URL o SUPABASE_ANON_KEY")
    app.state.backend = backend

    yield

    await backend.aclose()
    logger.info("Backend connection closed")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## GietCRM API

Gestión comercial para representantes de ventas.

* **Autenticación** - Email y contraseña contra el proveedor de identidad
* **Clientes** - Cartera de talleres
* **Visitas** - Registro de visitas y su resultado
* **Agenda** - Recordatorios de seguimiento
    """,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(CRMError)
async def crm_exception_handler(request: Request, exc: CRMError):
    """Translate the error taxonomy into HTTP responses."""
    status_code = next(
        (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    content = {"detail": exc.message}
    if isinstance(exc, ValidationError) and exc.fields:
        content["fields"] = exc.fields

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with Spanish messages."""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Error de validación de datos",
            "errors": errors,
        },
    )


# Include API router
app.include_router(api_router, prefix="/api/v1")


# Health check endpoint
@app.get(
    "/health",
    tags=["Salud"],
    summary="Estado del servidor",
)
async def health_check(request: Request):
    """Report whether the API is up and the backend configured."""
    backend = getattr(request.app.state, "backend", None)
    configured = backend.is_configured if backend is not None else settings.is_configured
    return {
        "status": "healthy" if configured else "needs_configuration",
        "configured": configured,
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# Root endpoint
@app.get(
    "/",
    tags=["Info"],
    summary="Información de la API",
)
async def root():
    """Get API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": "CRM para representantes comerciales",
        "docs": "/docs" if settings.is_development else "Disabled in production",
        "health": "/health",
    }


# For running with uvicorn directly
if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.getenv("PORT", "8000"))

    uvicorn.run(
        "gietcrm.main:app",
        host=settings.HOST,
        port=port,
        reload=settings.is_development,
    )
