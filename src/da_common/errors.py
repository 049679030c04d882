"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Session/Authorization
  2xxx: Phase
  3xxx: Validation (tenders, config, strike price)
  4xxx: Clearing
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Session/Authorization ---

class AuthorizationError(AppError):
    """Wrong role for a command. Never sent to the client; the dispatcher drops it."""

    def __init__(self, command: str, role: str | None) -> None:
        super().__init__(1001, f"Role {role} may not send {command}", 403)


# --- 2xxx: Phase ---

class PhaseError(AppError):
    def __init__(self, message: str = "Auction is not open") -> None:
        super().__init__(2001, message, 409)


# --- 3xxx: Validation ---

class TenderValidationError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 422)


class InvalidSubmissionError(TenderValidationError):
    def __init__(self) -> None:
        super().__init__(3001, "Invalid submission")


class QuantityExceededError(TenderValidationError):
    def __init__(self, limit: int) -> None:
        super().__init__(3002, f"Total quantity cannot exceed {limit} shares")


class InvalidConfigError(TenderValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(3003, f"Invalid configuration: {detail}")


class InvalidStrikePriceError(TenderValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(3004, f"Invalid strike price: {detail}")


# --- 4xxx: Clearing ---

class NoTendersError(AppError):
    def __init__(self) -> None:
        super().__init__(4001, "No tenders submitted", 409)


# --- 9xxx: System ---

class MalformedMessageError(AppError):
    def __init__(self, detail: str = "Malformed message") -> None:
        super().__init__(9001, detail, 400)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class QrGenerationError(AppError):
    def __init__(self) -> None:
        super().__init__(9003, "Failed to generate QR code", 500)
