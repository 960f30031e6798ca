from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime, timezone
from http import HTTPStatus
import logging

from app.config import APP_NAME, APP_VERSION, CORS_ORIGINS, ENV_FILE_LOADED, HOST, LOG_LEVEL, PORT, RELOAD
from app.exceptions import StringAnalyzerError
from app.store import init_store
from app.api.routes import router

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

if ENV_FILE_LOADED:
    logger.info("Loaded configuration from .env file (local development)")
else:
    logger.info("Loading configuration from environment (production)")

# Create FastAPI app
app = FastAPI(
    title=APP_NAME,
    description="Analyze, store and filter strings by their computed properties",
    version=APP_VERSION
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Initialize the store on startup
@app.on_event("startup")
def on_startup():
    logger.info("Initializing string store...")
    init_store(app)


# Include routers
app.include_router(router, tags=["strings"])


# Root endpoint
@app.get("/")
def root():
    return {
        "message": APP_NAME,
        "version": APP_VERSION,
        "endpoints": {
            "POST /strings": "Analyze and store a string",
            "GET /strings/{string_value}": "Get specific string analysis",
            "GET /strings": "Get all strings with optional filters",
            "GET /strings/filter-by-natural-language": "Filter using natural language",
            "DELETE /strings/{string_value}": "Delete a string",
            "GET /health": "Service health",
        }
    }


@app.get("/health")
def health_check(request: Request):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "total_strings": len(request.app.state.store),
    }


# Domain error handler
@app.exception_handler(StringAnalyzerError)
async def string_analyzer_error_handler(request: Request, exc: StringAnalyzerError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    body_errors = [e for e in errors if e["loc"] and e["loc"][0] == "body"]

    if not body_errors:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Bad Request",
                "message": "Invalid query parameter values or types"
            }
        )

    for error in body_errors:
        missing_body = error["type"] == "missing" and tuple(error["loc"]) in (("body",), ("body", "value"))
        null_value = error["type"] == "string_type" and error.get("input") is None
        if missing_body or null_value:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={
                    "error": "Bad Request",
                    "message": 'Missing "value" field in request body'
                }
            )

    for error in body_errors:
        if error["type"] == "string_type":
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={
                    "error": "Unprocessable Entity",
                    "message": 'Invalid data type for "value" (must be string)'
                }
            )
        if error["type"] == "value_error" and tuple(error["loc"]) == ("body", "value"):
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={
                    "error": "Unprocessable Entity",
                    "message": 'Invalid "value" (must be valid Unicode text)'
                }
            )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Bad Request", "message": "Invalid request body"}
    )


# HTTPException handler (unmatched routes, wrong methods)
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Not Found", "message": "Endpoint not found"}
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": HTTPStatus(exc.status_code).phrase, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


# Generic error handler
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "message": "Something went wrong!"
        }
    )


if __name__ == "__main__":
    import uvicorn
    logger.info(f"{APP_NAME} starting on port {PORT}")
    uvicorn.run("app.main:app", host=HOST, port=PORT, reload=RELOAD)
