"""Global enums — values are the strings used on the websocket wire."""

from enum import Enum


class AuctionPhase(str, Enum):
    WAITING = "waiting"
    OPEN = "open"
    CLOSED = "closed"
    RESULTS = "results"


class SessionRole(str, Enum):
    """Capability bound to a session at registration. Self-declared, not authenticated."""
    ADMIN = "admin"
    PARTICIPANT = "participant"


class ClearingPolicyName(str, Enum):
    """AUTO: discovered strike, pro-rata only at the strike level.
    FIXED: admin-supplied strike, one pro-rata factor over everything accepted."""
    AUTO = "auto"
    FIXED = "fixed"


class CommandType(str, Enum):
    REGISTER_ADMIN = "register-admin"
    REGISTER_PARTICIPANT = "register-participant"
    UPDATE_CONFIG = "update-config"
    OPEN_AUCTION = "open-auction"
    SUBMIT_TENDER = "submit-tender"
    CLOSE_AUCTION = "close-auction"
    CALCULATE = "calculate"
    RESET = "reset"


class Audience(str, Enum):
    """Who receives an outbound event."""
    SENDER = "SENDER"
    ALL = "ALL"
    ADMINS = "ADMINS"
