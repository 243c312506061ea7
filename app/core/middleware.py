from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import logging

from app.config.settings import Settings
from app.core.exceptions import POSError

logger = logging.getLogger(__name__)

def setup_middleware(app: FastAPI, settings: Settings):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response


def setup_exception_handlers(app: FastAPI):
    """Traducir la taxonomía de errores a status HTTP y cuerpo {error: ...}"""

    @app.exception_handler(POSError)
    async def pos_error_handler(request: Request, exc: POSError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {exc.error_code}: {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} - {exc.error_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "error_code": exc.error_code,
                "details": exc.details,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in errors]
        message = "Invalid request: " + "; ".join(
            f"{field or 'body'}: {err.get('msg')}" for field, err in zip(fields, errors)
        )
        logger.warning(f"{request.method} {request.url.path} - ValidationError: {message}")
        return JSONResponse(
            status_code=400,
            content={
                "error": message,
                "error_code": "ValidationError",
                "details": {"fields": fields},
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Error inesperado en {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "error_code": "StorageFailure",
                "details": {},
            },
        )
