from dataclasses import dataclass, field
from typing import Any

from starlette.websockets import WebSocket

from src.da_common.enums import Audience, SessionRole


@dataclass(eq=False)
class Session:
    """One websocket connection. `role` is the capability bound at registration."""

    id: str
    socket: WebSocket
    role: SessionRole | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == SessionRole.ADMIN


@dataclass(frozen=True)
class Outbound:
    """An event produced by a command, addressed to an audience."""

    audience: Audience
    payload: dict[str, Any] = field(default_factory=dict)
