"""FastAPI application entry point.

Run with: uvicorn src.main:app --port 3000 --loop uvloop
     or: dutch-auction   (console script, see run())
"""

import logging
import socket
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config.settings import settings
from src.da_auction.api.router import router as auction_router
from src.da_auction.domain.state_machine import AuctionStateMachine
from src.da_common.errors import AppError
from src.da_common.response import error_response
from src.da_gateway.api.qr_router import router as qr_router
from src.da_gateway.api.ws_router import router as ws_router
from src.da_gateway.application.dispatcher import CommandDispatcher
from src.da_gateway.middleware.request_log import RequestLogMiddleware
from src.da_gateway.session.registry import SessionRegistry

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def local_ip() -> str:
    """First non-loopback IPv4 address, for the participant link in the banner."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        try:
            # UDP connect sends nothing; it only selects the outbound interface
            s.connect(("10.255.255.255", 1))
            return s.getsockname()[0]
        except OSError:
            return "localhost"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: log the admin/participant links. Shutdown: nothing to release."""
    logger.info("%s v%s", settings.APP_NAME, VERSION)
    logger.info("Admin panel:      http://localhost:%d/admin.html", settings.PORT)
    logger.info("Participant link: http://%s:%d", local_ip(), settings.PORT)
    logger.info("Share the participant link or scan the QR code from the admin panel")
    yield
    logger.info("Shutting down with %d open sessions", len(app.state.registry))


app = FastAPI(
    title=settings.APP_NAME,
    version=VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Single-room model: one state machine owns the round for the process lifetime
app.state.machine = AuctionStateMachine()
app.state.registry = SessionRegistry()
app.state.dispatcher = CommandDispatcher(app.state.machine, app.state.registry)

app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, getattr(request.state, "request_id", None))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(auction_router, prefix="/api/v1")
app.include_router(qr_router, prefix="/api/v1")
app.include_router(ws_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": VERSION}


# Mounted last so API and websocket routes take precedence over "/"
if Path(settings.PUBLIC_DIR).is_dir():
    app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")


def run() -> None:
    import uvicorn

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, loop="uvloop")
