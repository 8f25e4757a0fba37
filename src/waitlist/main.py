import logging

import uvicorn
from fastapi import FastAPI

from waitlist.api.waitlist import router as waitlist_router
from waitlist.config import settings
from waitlist.telemetry import setup_tracing

LOG_LEVEL = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

logger = logging.getLogger(__name__)

# Configure service logging
waitlist_logger = logging.getLogger("waitlist")
waitlist_logger.setLevel(LOG_LEVEL)

def create_application() -> FastAPI:
    setup_tracing()
    app = FastAPI(
        title="Waitlist",
        description="Waitlist signup endpoint",
        version="0.1.0",
    )

    # CORS headers are written by the waitlist routes themselves
    app.include_router(waitlist_router)

    return app

app = create_application()

def run() -> None:
    logging.basicConfig(level=LOG_LEVEL)
    logger.info(f"Starting waitlist service on {settings.WAITLIST_HOST}:{settings.WAITLIST_PORT}")
    uvicorn.run(app, host=settings.WAITLIST_HOST, port=settings.WAITLIST_PORT)

if __name__ == "__main__":
    run()
