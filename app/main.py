"""FastAPI application setup and error translation for EcoWatch."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import router as api_router
from .config import settings
from .errors import EcoWatchError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/main")

app = FastAPI(title="EcoWatch")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(EcoWatchError)
async def handle_ecowatch_error(request: Request, exc: EcoWatchError) -> JSONResponse:
    """Report pipeline errors as `{"error": message}` with their status code."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything unplanned is a 500 with the same error shape."""
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"error": f"Internal Server Error: {exc}"})


@app.get("/health")
def health():
    """Liveness probe; never calls upstream."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/api/v1")
