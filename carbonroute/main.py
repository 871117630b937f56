from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import HTTPException
from dotenv import load_dotenv
import logging
import time
import uvicorn

# Load environment variables from .env file
load_dotenv()

from carbonroute.core.logging import setup_logging
from carbonroute.core.settings import get_settings
from carbonroute.core.exceptions import InvalidInputError
from carbonroute.api.v1 import emissions, routes, weather

settings = get_settings()

# Setup logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="carbonroute API", version="1.0.0")

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

    process_time = time.time() - start_time
    logger.info(
        f"Response: {method} {path} - Status: {response.status_code} - Duration: {process_time:.4f}s"
    )
    return response


# Include routers
app.include_router(emissions.router, prefix="/api/v1/emissions", tags=["emissions"])
app.include_router(routes.router, prefix="/api/v1/routes", tags=["routes"])
app.include_router(weather.router, prefix="/api/v1/weather", tags=["weather"])


@app.get("/api/v1", summary="API Welcome", tags=["General"])
async def api_welcome_message():
    """Provides a welcome message and basic API information."""
    return {
        "message": "Welcome to carbonroute API v1.0",
        "version": app.version,
        "documentation_url": app.docs_url,
        "openapi_url": app.openapi_url,
        "weather_adjustment_source": settings.WEATHER_ADJUSTMENT_SOURCE,
        "route_adjustment_enabled": settings.APPLY_ROUTE_ADJUSTMENT,
    }


@app.get("/health", include_in_schema=False)
async def health():
    return {"status": "ok", "environment": settings.ENVIRONMENT}


@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


@app.exception_handler(InvalidInputError)
async def invalid_input_exception_handler(request: Request, exc: InvalidInputError):
    logger.warning(f"Invalid input on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def run():
    """Console entry point."""
    logger.info(f"Starting server on {settings.HOST}:{settings.PORT}, environment: {settings.ENVIRONMENT}")
    uvicorn.run(
        "carbonroute.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",
    )


if __name__ == "__main__":
    run()
