"""
Schemata — data-modeling dashboard backend
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import dashboard, domain_models, form_models, health, operation_models, storage_models, view_models
from config import settings
from core.errors import ValidationError
from db.database import init_db

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("schemata")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Schemata starting up…")
    init_db()
    yield
    logger.info("Schemata shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="Schemata — Data Modeling Dashboard",
    description="Import storage models from live databases and layer views, forms, operations and domains on top.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Errors ────────────────────────────────────────────────────────────────────
def _describe(error: dict) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    msg = str(error.get("msg", "")).removeprefix("Value error, ")
    return f"{loc}: {msg}" if loc else msg


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    err = ValidationError.from_messages([_describe(e) for e in exc.errors()])
    return JSONResponse(status_code=err.status_code, content={"detail": err.message})


# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router,           prefix="/api")
app.include_router(storage_models.router,   prefix="/api")
app.include_router(view_models.router,      prefix="/api")
app.include_router(form_models.router,      prefix="/api")
app.include_router(operation_models.router, prefix="/api")
app.include_router(domain_models.router,    prefix="/api")
app.include_router(dashboard.router,        prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT)
