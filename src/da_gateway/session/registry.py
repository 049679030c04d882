"""SessionRegistry — connected sessions, their roles, and event delivery.

Routing only: the registry never reads or writes auction state.
"""
import itertools
import logging
from typing import Any

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from src.da_common.enums import Audience, SessionRole
from src.da_gateway.session.models import Outbound, Session

logger = logging.getLogger(__name__)


class SessionRegistry:
    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._sessions)

    def connect(self, socket: WebSocket) -> Session:
        session = Session(id=str(next(self._ids)), socket=socket)
        self._sessions[session.id] = session
        logger.info("Session %s connected (%d open)", session.id, len(self._sessions))
        return session

    def disconnect(self, session: Session) -> None:
        self._sessions.pop(session.id, None)
        logger.info("Session %s disconnected (%d open)", session.id, len(self._sessions))

    def bind_role(self, session: Session, role: SessionRole) -> None:
        """(Re-)register a session. Switching roles is allowed at any time."""
        if session.role != role:
            logger.info("Session %s registered as %s", session.id, role.value)
        session.role = role

    def sessions(self) -> list[Session]:
        return list(self._sessions.values())

    def admins(self) -> list[Session]:
        return [s for s in self._sessions.values() if s.is_admin]

    def recipients(self, sender: Session, audience: Audience) -> list[Session]:
        if audience == Audience.SENDER:
            return [sender]
        if audience == Audience.ADMINS:
            return self.admins()
        return self.sessions()

    async def deliver(self, sender: Session, outbound: Outbound) -> None:
        for session in self.recipients(sender, outbound.audience):
            await self._send(session, outbound.payload)

    async def _send(self, session: Session, payload: dict[str, Any]) -> None:
        socket = session.socket
        if socket.client_state != WebSocketState.CONNECTED:
            return
        try:
            await socket.send_json(payload)
        except (WebSocketDisconnect, RuntimeError):
            # Peer went away mid-broadcast; its own receive loop cleans it up
            logger.warning("Dropped %s event for session %s", payload.get("type"), session.id)
