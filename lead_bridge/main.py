"""
Lead Mail Bridge — FastAPI Service

Receives lead-capture webhooks, normalizes the payload, and emails a plaintext summary.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lead_bridge.config import get_settings
from lead_bridge.errors import BridgeError
from lead_bridge.routes import send

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings on startup so missing env vars stop the process before serving."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Lead bridge starting (test_mode=%s, debug_mailer=%s)",
        settings.test_mode,
        settings.debug_mailer,
    )
    yield


app = FastAPI(
    title="Lead Mail Bridge API",
    description="Relays form-platform lead webhooks as plaintext emails.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(send.router, prefix="/api/send")


@app.exception_handler(BridgeError)
async def bridge_error_handler(request: Request, exc: BridgeError):
    """Every bridge failure answers with its own status and JSON body."""
    if exc.status_code >= 500:
        logger.error("[MAILER] ERROR: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.get("/health", tags=["health"])
async def health():
    """Health check for load balancers and container orchestration."""
    return {"status": "ok"}
