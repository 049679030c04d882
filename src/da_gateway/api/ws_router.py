"""Websocket transport: one connection per browser tab, JSON text frames."""
import logging

from fastapi import APIRouter, WebSocket

from src.da_gateway.application.dispatcher import CommandDispatcher
from src.da_gateway.session.registry import SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auction"])


@router.websocket("/ws")
async def auction_socket(websocket: WebSocket) -> None:
    registry: SessionRegistry = websocket.app.state.registry
    dispatcher: CommandDispatcher = websocket.app.state.dispatcher

    await websocket.accept()
    session = registry.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text") or message.get("bytes") or ""
            # Each message is fully dispatched before the next is read
            for outbound in dispatcher.dispatch(session, raw):
                await registry.deliver(session, outbound)
    finally:
        registry.disconnect(session)
