import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL must be set in the environment")

ALLOWED_ORIGINS_RAW = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173")

ALLOWED_ORIGINS: list[str] = [
    origin.strip() for origin in ALLOWED_ORIGINS_RAW.split(",") if origin.strip()
]

# Pricing mode used by POST /api/bookings when the request does not pick one.
# "trust" accepts caller-supplied nights/prices, "derive" recomputes them.
DEFAULT_PRICING_MODE = os.getenv("DEFAULT_PRICING_MODE", "trust").lower()

STRICT_OVERLAP_CHECK = os.getenv("STRICT_OVERLAP_CHECK", "false").lower() == "true"
STRICT_STATUS_TRANSITIONS = os.getenv("STRICT_STATUS_TRANSITIONS", "false").lower() == "true"

DEFAULT_PAGE_SIZE = 10
