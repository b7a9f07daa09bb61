"""
Text Chain Service
Main application entry point

Serves order-N Markov chain text generation over HTTP. Models are trained
from request corpora and kept in an in-process cache.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from textchain.config import settings
from textchain.services.coding_dict import DICTIONARY_TYPES
from textchain.utils.logger import setup_logger

# Setup logging
logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for service initialization"""
    logger.info(f"[BOOT] Starting {settings.SERVICE_NAME} v{settings.SERVICE_VERSION}...")
    logger.info(
        f"[BOOT] Markov defaults: order={settings.MARKOV_ORDER}, dictionary={settings.MARKOV_DICTIONARY}"
    )
    if settings.MARKOV_DICTIONARY not in DICTIONARY_TYPES:
        logger.error(f"[ERR] Unknown MARKOV_DICTIONARY: {settings.MARKOV_DICTIONARY}")
        raise ValueError(f"unknown coding dictionary {settings.MARKOV_DICTIONARY!r}")
    logger.info("[BOOT] Service ready!")
    yield
    logger.info("[SHUTDOWN] Service stopped")


# Create FastAPI app
app = FastAPI(
    title="Text Chain Service",
    description="Order-N Markov chain text generator",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"[ERR] Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": {
                "code": "TEXTCHAIN_SERVICE_ERROR",
                "message": "Internal server error occurred",
                "details": {"type": type(exc).__name__},
            },
        },
    )


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    from textchain.api.routers.markov_router import MODEL_CACHE

    return {
        "ok": True,
        "data": {
            "status": "healthy",
            "service": settings.SERVICE_NAME,
            "models": len(MODEL_CACHE),
            "dictionaries": sorted(DICTIONARY_TYPES),
        },
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "endpoints": {
            "health": "/health",
            "docs": "/docs",
            "markov": "/markov/*",
        },
    }


from textchain.api.routers import markov_router  # noqa: E402

app.include_router(markov_router.router, prefix="/markov", tags=["Markov"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("textchain.app:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
