"""
Oscar Party - FastAPI Backend
Main application entry point
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from oscar_party.core.config import settings
from oscar_party.core.db import engine, Base
from oscar_party.core.exceptions import PartyValidationError
from oscar_party.api import routes_admin, routes_guest, routes_public, ws
from oscar_party.services.bootstrap import create_party_service
from oscar_party.utils.responses import party_validation_handler

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")

    service = create_party_service(settings)
    app.state.party_service = service
    stop_relay = ws.relay_sync_messages(service, asyncio.get_running_loop())
    service.sync.start()

    yield

    stop_relay()
    service.sync.stop()
    service.channel.close()
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Oscar Party",
    description="RSVPs, ballots and a live leaderboard for an Oscars watch party",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(PartyValidationError, party_validation_handler)

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_guest.router, prefix="/guest", tags=["guest"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])
app.include_router(ws.router, prefix="/ws", tags=["websocket"])

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
