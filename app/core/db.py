from tortoise import Tortoise
from app.core.config import DB_URL, GENERATE_SCHEMAS
import logging
from logging import INFO

# Set logging level for Tortoise ORM
logging.getLogger('tortoise').setLevel(INFO)
log = logging.getLogger("db")

# Define all models modules for the ORM
MODELS_MODULES = [
    "app.models.inventory",
    "app.models.menu",
    "app.models.employee",
    "app.models.order",
    "app.models.report",
]

async def init_db(db_url: str = DB_URL, generate_schemas: bool = GENERATE_SCHEMAS):
    """Initializes the Tortoise ORM connection and generates schemas."""
    try:
        await Tortoise.init(
            db_url=db_url,
            modules={"models": MODELS_MODULES},
        )
        if generate_schemas:
            # Generate the database schema (create tables)
            await Tortoise.generate_schemas(safe=True)
        log.info("Database connection established.")
    except Exception as e:
        log.error(f"FATAL ERROR: Could not connect to database. Error: {e}")
        # Re-raise to prevent the application from starting without a database
        raise

async def close_db():
    """Closes all database connections."""
    await Tortoise.close_connections()
    log.info("Database connections closed.")
