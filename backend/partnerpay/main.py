"""
PartnerPay Backend - FastAPI Application

Hosts the partner transaction validation and pricing pipeline.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from .config import settings
from .exceptions import PartnerPayError
from .models.transactions import TransactionResponse
from .services.credential_store import get_credential_store
from .api.transactions import router as transactions_router


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup: load the partner credential store before serving requests.
    """
    logger.info("Starting PartnerPay backend server...")
    logger.info(f"Demo mode: {settings.demo_mode}")

    try:
        get_credential_store()
        logger.info("Credential store initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize credential store: {e}")
        raise

    logger.info("Server startup complete")

    yield

    logger.info("Shutting down PartnerPay backend server...")


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Partner transaction validation and discount pricing",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.exception_handler(PartnerPayError)
async def partnerpay_error_handler(request: Request, exc: PartnerPayError):
    """
    Render rejections in the transaction response envelope.

    The body only carries result and resultMessage; the reason code and
    details stay in the logs.
    """
    logger.warning(
        f"Transaction rejected: {exc.error_code} - {exc.message}",
        extra={"details": exc.details}
    )

    response = TransactionResponse(result=0, result_message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=response.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handle request body validation failures.

    All field messages are joined into one resultMessage and returned as 400.
    """
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg") or "Invalid input."
        messages.append(f"{location}: {message}" if location else message)

    combined = "; ".join(messages) or "Model validation failed with one or more errors."
    logger.warning(f"Model validation failed: {combined}")

    response = TransactionResponse(result=0, result_message=combined)
    return JSONResponse(status_code=400, content=response.to_body())


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unexpected errors.

    Logs full exception for debugging but returns generic message to client.
    """
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)

    message = "An unexpected error occurred."
    if settings.demo_mode:
        message = f"{message} ({type(exc).__name__})"

    response = TransactionResponse(result=0, result_message=message)
    return JSONResponse(status_code=500, content=response.to_body())


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        Server status and version information
    """
    return {
        "status": "healthy",
        "version": settings.app_version,
        "demo_mode": settings.demo_mode,
        "partners_loaded": len(get_credential_store()),
    }


# Include API routers
app.include_router(transactions_router, prefix="/api", tags=["Transactions"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "partnerpay.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.demo_mode,
        log_level=settings.log_level.lower()
    )
