"""Tasting Events Web Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from app.core.config import settings
from app.core.database import create_db_and_tables
from app.routes import beers, events, favorites, participants, reviews, users
from app.schemas import ErrorResponse, HealthResponse
from app.tasting.errors import TastingError, ValidationFailedError

# Configure logging
log_config = {
    "level": logging.DEBUG if settings.debug else logging.INFO,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
if settings.log_dir:
    log_dir = Path(settings.log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_config["filename"] = str(log_dir / "latest.log")

logging.basicConfig(**log_config)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting Tasting Events application")
    create_db_and_tables()
    yield
    logger.info("Tasting Events application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Host beer tasting events, log the beers poured and collect everyone's reviews",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(users.router)
app.include_router(events.router)
app.include_router(participants.router)
app.include_router(beers.router)
app.include_router(favorites.router)
app.include_router(reviews.router)


@app.exception_handler(TastingError)
async def tasting_error_handler(request: Request, exc: TastingError):
    """Render domain failures as JSON with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")

    errors = exc.errors if isinstance(exc, ValidationFailedError) else None
    body = ErrorResponse(detail=exc.message, errors=errors)
    return JSONResponse(body.model_dump(exclude_none=True), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Answer malformed requests with 400 and a field -> message map."""
    errors = {}
    for error in exc.errors():
        # Drop the "body" / "path" / "query" prefix from the location
        loc = [str(part) for part in error.get("loc", ())[1:]]
        field = ".".join(loc) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value."))
    body = ErrorResponse(detail="Validation failed", errors=errors)
    return JSONResponse(body.model_dump(), status_code=400)


@app.get("/")
async def root(request: Request):
    """Redirect root to the API docs."""
    rp = request.scope.get("root_path", "")
    return RedirectResponse(f"{rp}/docs")


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=settings.debug)
