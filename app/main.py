# app/main.py
"""
FastAPI application entry point.
Includes CORS, request timing, domain error handlers, and all routers.
Run: python -m app.main  (or uvicorn app.main:app --port 3001)
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from app.routers import bookings, health
from app.services.booking_service import BookingNotFound, InvalidBookingInput, NotificationFailure
from app.store import load_bookings
from app.config import settings
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title=f"{settings.BUSINESS_NAME} Booking API",
    description="Car rental bookings — availability, booking form, staff dashboard.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (booking form and dashboard are served from other origins) ─────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Domain Error Handlers ────────────────────────────────────────────────────
@app.exception_handler(BookingNotFound)
async def booking_not_found_handler(request: Request, exc: BookingNotFound):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Booking not found"})


@app.exception_handler(InvalidBookingInput)
async def invalid_input_handler(request: Request, exc: InvalidBookingInput):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


@app.exception_handler(NotificationFailure)
async def notification_failure_handler(request: Request, exc: NotificationFailure):
    # The booking is already saved; only the request is reported as failed
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": str(exc)},
    )


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(bookings.router, prefix="/api", tags=["🚗 Bookings"])
app.include_router(health.router,   prefix="/api", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info(f"🚀 {settings.BUSINESS_NAME} backend starting up...")
    load_bookings()
    if not settings.MAIL_CONFIGURED:
        logger.warning("✉️  SMTP_HOST / MAIL_FROM not set — booking emails will fail")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info(f"🛑 {settings.BUSINESS_NAME} backend shutting down...")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.BACKEND_HOST, port=settings.BACKEND_PORT)
