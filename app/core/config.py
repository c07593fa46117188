import os

# Database Configuration
# Uses default credentials for local Docker Compose setup
DB_URL = os.getenv("DATABASE_URL", "postgres://user:password@db:5432/restaurant_pos")
GENERATE_SCHEMAS = os.getenv("GENERATE_SCHEMAS", "true").lower() in ("1", "true", "yes")

# Application Metadata
PROJECT_NAME = "Restaurant POS Back Office"
VERSION = "1.0.0"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Comma separated list, "*" allows any origin
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# The menu board and kiosk only know these four sections
MENU_CATEGORIES = ("entree", "side", "drink", "extra")
