"""FastAPI app definition and route registration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wild_oasis.config import ALLOWED_ORIGINS
from wild_oasis.logging_config import setup_logging
from wild_oasis.middleware import RequestIDMiddleware
from wild_oasis.routes.bookings import router as bookings_router
from wild_oasis.routes.cabins import router as cabins_router
from wild_oasis.routes.guests import router as guests_router
from wild_oasis.routes.health import router as health_router
from wild_oasis.routes.metrics import router as metrics_router
from wild_oasis.routes.settings import router as settings_router

setup_logging()

app = FastAPI(title="Wild Oasis API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

# Register routers
app.include_router(bookings_router, prefix="/api/bookings", tags=["bookings"])
app.include_router(cabins_router, prefix="/api/cabins", tags=["cabins"])
app.include_router(guests_router, prefix="/api/guests", tags=["guests"])
app.include_router(settings_router, prefix="/api/settings", tags=["settings"])
app.include_router(health_router)
app.include_router(metrics_router)
