# expense_tracker/main.py
import uvicorn
import os
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from expense_tracker.core.config import settings
from expense_tracker.core.database import engine, Base, AsyncSessionLocal
from expense_tracker.core.access import AccessControlMiddleware
from expense_tracker.core.exceptions import AppError
from expense_tracker.api.api import api_router, root_router
from expense_tracker.utils.seed import seed_demo_data

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create all tables on startup (Alembic manages the schema in deployed environments)
async def create_db_and_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await create_db_and_tables()
        logger.info("Database tables created successfully")
        if settings.SEED_DEMO_DATA:
            async with AsyncSessionLocal() as session:
                await seed_demo_data(session)
    except Exception as e:
        logger.error(f"Startup error: {str(e)}")
        raise
    yield
    await engine.dispose()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Authentication", "description": "Registration, login and the current user"},
        {"name": "Expense Categories", "description": "Category catalogue; mutations are admin-only"},
        {"name": "Expenses", "description": "Expenses owned by the authenticated user"},
        {"name": "Users", "description": "Person records (profile data, not login accounts)"},
    ],
)

# Added first so CORS wraps it and preflight responses carry CORS headers
app.add_middleware(AccessControlMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------------------------------------------
# ERROR HANDLERS
# ------------------------------------------------------------
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=exc.headers,
    )

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg')}" if location else str(first.get("msg", "Invalid request"))
    return JSONResponse(
        status_code=400,
        content={
            "error": message,
            "details": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                for err in errors
            ],
        },
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )

# ------------------------------------------------------------
# ROUTES
# ------------------------------------------------------------
app.include_router(root_router)
app.include_router(api_router)

if settings.STATIC_DIR and Path(settings.STATIC_DIR).is_dir():
    app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("expense_tracker.main:app", host="0.0.0.0", port=port, reload=False)
