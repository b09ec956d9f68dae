"""
Sleep & Meal Tracker – Backend API
Start with: uvicorn tracker.main:app --reload   (or: python -m tracker)
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from tracker import __version__, config
from tracker.db import init_db
from tracker.errors import TrackerError
from tracker.routers import meals, records, sleep

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()
    init_db()
    logger.info("Database ready at %s", config.DATABASE_URL)
    yield


app = FastAPI(
    title="Sleep & Meal Tracker API",
    description="Record sleep sessions and meals, list them and summarise the last few days",
    version=__version__,
    lifespan=lifespan,
)

# The bundled page is served from the same origin, but allow other frontends too
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {problems}"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


app.include_router(sleep.router)
app.include_router(meals.router)
app.include_router(records.router)


@app.get("/health")
def health():
    """Check that the API is running."""
    return {"status": "ok", "message": "Tracker API is running"}


# Mounted last so the API routes above take precedence
static_dir = Path(config.STATIC_DIR)
if static_dir.is_dir():
    logger.info("Serving static files from %s", static_dir.resolve())
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
else:

    @app.get("/")
    def root():
        """Root welcome, used when no frontend is bundled."""
        return {"app": "Sleep & Meal Tracker", "docs": "/docs"}
