import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from app.core.db import init_db, close_db
from app.api.v1.orders import router as orders_router
from app.api.v1.kitchen import router as kitchen_router
from app.api.v1.menu import router as menu_router
from app.api.v1.inventory import router as inventory_router
from app.api.v1.employees import router as employees_router
from app.api.v1.reports import router as reports_router
from app.core.config import PROJECT_NAME, VERSION, LOG_LEVEL, LOG_FORMAT, CORS_ORIGINS
from app.core.exception_handlers import setup_exception_handlers

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
log = logging.getLogger("uvicorn")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db() # Connect to DB and generate schemas
    yield
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)

# Kiosk, register, kitchen screen and menu board are separate front ends
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers for modular API structure
app.include_router(orders_router, prefix="/api/v1/orders", tags=["Order Placement"])
app.include_router(kitchen_router, prefix="/api/v1/kitchen", tags=["Kitchen Lane"])
app.include_router(menu_router, prefix="/api/v1/menu", tags=["Menu Administration"])
app.include_router(inventory_router, prefix="/api/v1/inventory", tags=["Inventory Administration"])
app.include_router(employees_router, prefix="/api/v1/employees", tags=["Employee Administration"])
app.include_router(reports_router, prefix="/api/v1/reports", tags=["Sales Reports"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
