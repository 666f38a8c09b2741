from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
import logging
import time
import uvicorn
from fastapi.exceptions import HTTPException

from ghroute.core.logging import setup_logging
from ghroute.core.settings import get_settings

# Load environment variables from .env file
load_dotenv()

settings = get_settings()

# Setup logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

from ghroute.api.v1 import navigate, routing

app = FastAPI(title="ghroute API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests_middleware(request: Request, call_next):
    """Log incoming requests and their processing time."""
    start_time = time.time()
    method = request.method
    path = request.url.path

    logger.info(f"Request: {method} {path}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"Response: {method} {path} - Status: {response.status_code} - Duration: {process_time:.4f}s"
        )
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"Error: {method} {path} - Exception: {str(e)} - Duration: {process_time:.4f}s",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal Server Error. Please check logs for more details."},
        )


# Include routers
app.include_router(routing.router, prefix="/api/v1", tags=["routing"])
app.include_router(navigate.router, prefix="/navigate", tags=["navigate"])


@app.get("/api/v1", summary="API Welcome", tags=["General"])
async def api_welcome_message():
    """Provides a welcome message and basic API information."""
    return {
        "message": "Welcome to ghroute API v1.0",
        "version": app.version,
        "routing_service": settings.GRAPHHOPPER_URL,
        "documentation_url": app.docs_url,
        "openapi_url": app.openapi_url,
    }


@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


if __name__ == "__main__":
    port = settings.PORT
    host = settings.HOST

    logger.info(f"Starting server on {host}:{port}, environment: {settings.ENVIRONMENT}")

    uvicorn.run(
        "ghroute.main:app",
        host=host,
        port=port,
        log_level=logging.getLevelName(logger.getEffectiveLevel()).lower(),
        reload=True if settings.ENVIRONMENT == "development" else False,
    )
