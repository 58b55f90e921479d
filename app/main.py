from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from datetime import datetime
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load .env variables
load_dotenv()

# Configure base logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("app")

from app.routers import (
    announcements,
    bookings,
    coupons,
    courts,
    payments,
    stats,
    users,
)
from app.database import engine, Base, SessionLocal
from app.init_db import create_initial_admins
from app.services.email import email_service
from app.services.firebase import firebase_service
from app.services.payments import payment_processor
from app import models  # noqa: F401  registers tables on Base.metadata
import uvicorn


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Create database tables (alembic owns the schema in deployed environments)
    Base.metadata.create_all(bind=engine)

    logger.info("Seeding administrators from ADMIN_EMAIL...")
    db = SessionLocal()
    try:
        create_initial_admins(db)
    finally:
        db.close()

    if not firebase_service.initialize():
        logger.warning("Firebase Admin not configured: protected routes will fail")
    if not payment_processor.is_configured():
        logger.warning("STRIPE_SECRET_KEY not set: payment routes will fail")
    if email_service.is_configured():
        logger.info("Email error reporting configured successfully")
    else:
        logger.info("Email error reporting disabled")

    yield


app = FastAPI(
    title="Sports Club API",
    description="API for courts, bookings, payments and memberships of a sports club",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(users.members_router, prefix="/members", tags=["members"])
app.include_router(courts.router, prefix="/courts", tags=["courts"])
app.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
app.include_router(coupons.router, prefix="/coupons", tags=["coupons"])
app.include_router(coupons.validation_router, tags=["coupons"])
app.include_router(payments.router, tags=["payments"])
app.include_router(
    announcements.router, prefix="/announcements", tags=["announcements"]
)
app.include_router(stats.router, tags=["stats"])


@app.get("/")
def read_root():
    return {"message": "Sports Club API is running"}


# Global unhandled exception handler -> logs ERROR and sends email
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
        exc_info=exc,
    )

    if email_service.is_configured():
        email_service.send_error_email(
            {
                "path": request.url.path,
                "method": request.method,
                "client": request.client.host if request.client else "unknown",
                "exception": exc,
                "timestamp": datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S"),
            }
        )

    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
