import os
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()

ENV = os.getenv("ENV", "development")
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./parkspot.db")
DB_POOL_PRE_PING = os.getenv("DB_POOL_PRE_PING", "true").lower() == "true"
LOG_FILE = os.getenv("LOG_FILE")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# Minimum bookable duration, in hours
MIN_BOOKING_HOURS = Decimal(os.getenv("MIN_BOOKING_HOURS", "1"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
