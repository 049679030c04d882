"""CommandDispatcher — turns one inbound websocket message into outbound events.

Pipeline per message:
  1. parse JSON and the `type` tag        (unparseable/unknown -> dropped)
  2. check the session's role capability  (wrong role -> dropped, no reply)
  3. validate the payload, call the state machine
  4. AppError from the core -> `error` event to the sender only;
     a failed invariant or decimal error -> 9002 to the sender, round untouched

dispatch() is synchronous: the round is never observed half-updated.
"""
import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import ValidationError

from src.da_auction.application.schemas import ConfigOut, TenderOut
from src.da_auction.application.snapshots import AdminStateOut
from src.da_auction.domain.state_machine import AuctionStateMachine
from src.da_clearing.application.schemas import ClearingResultOut
from src.da_common.enums import Audience, CommandType, SessionRole
from src.da_common.errors import (
    AppError,
    AuthorizationError,
    InvalidConfigError,
    InvalidStrikePriceError,
    InternalError,
    InvalidSubmissionError,
    MalformedMessageError,
)
from src.da_common.wire import WireModel
from src.da_gateway.application.schemas import (
    CalculateCommand,
    ConfigUpdatedEvent,
    ErrorEvent,
    PhaseEvent,
    RegisteredEvent,
    ResultsEvent,
    StateEvent,
    SubmitTenderCommand,
    SubmittedEvent,
    UpdateConfigCommand,
)
from src.da_gateway.session.models import Outbound, Session
from src.da_gateway.session.registry import SessionRegistry
from src.da_risk.rules.phase_gate import check_phase_open

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=WireModel)

# None = any session, registered or not
REQUIRED_ROLE: dict[CommandType, SessionRole | None] = {
    CommandType.REGISTER_ADMIN: None,
    CommandType.REGISTER_PARTICIPANT: None,
    CommandType.UPDATE_CONFIG: SessionRole.ADMIN,
    CommandType.OPEN_AUCTION: SessionRole.ADMIN,
    CommandType.SUBMIT_TENDER: SessionRole.PARTICIPANT,
    CommandType.CLOSE_AUCTION: SessionRole.ADMIN,
    CommandType.CALCULATE: SessionRole.ADMIN,
    CommandType.RESET: SessionRole.ADMIN,
}


def parse_command(raw: str | bytes) -> tuple[CommandType, dict[str, Any]]:
    """Decode a message into (command type, payload). Raises MalformedMessageError."""
    try:
        payload = json.loads(raw)
    except (ValueError, TypeError) as e:
        raise MalformedMessageError("Message is not valid JSON") from e
    if not isinstance(payload, dict):
        raise MalformedMessageError("Message is not a JSON object")
    try:
        return CommandType(payload.get("type")), payload
    except ValueError as e:
        raise MalformedMessageError(f"Unknown message type: {payload.get('type')!r}") from e


def authorize(session: Session, command: CommandType) -> None:
    """Raise AuthorizationError if the session lacks the role the command needs."""
    required = REQUIRED_ROLE[command]
    if required is not None and session.role != required:
        role = session.role.value if session.role else None
        raise AuthorizationError(command.value, role)


def _load(model: type[M], payload: dict[str, Any], error: Callable[[str], AppError]) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(part) for part in first["loc"])
        raise error(f"{where}: {first['msg']}") from e


def _to(audience: Audience, event: WireModel) -> Outbound:
    return Outbound(audience=audience, payload=event.to_wire())


class CommandDispatcher:
    def __init__(self, machine: AuctionStateMachine, registry: SessionRegistry) -> None:
        self._machine = machine
        self._registry = registry
        self._handlers: dict[CommandType, Callable[[Session, dict[str, Any]], list[Outbound]]] = {
            CommandType.REGISTER_ADMIN: self._register_admin,
            CommandType.REGISTER_PARTICIPANT: self._register_participant,
            CommandType.UPDATE_CONFIG: self._update_config,
            CommandType.OPEN_AUCTION: self._open_auction,
            CommandType.SUBMIT_TENDER: self._submit_tender,
            CommandType.CLOSE_AUCTION: self._close_auction,
            CommandType.CALCULATE: self._calculate,
            CommandType.RESET: self._reset,
        }

    def dispatch(self, session: Session, raw: str | bytes) -> list[Outbound]:
        try:
            command, payload = parse_command(raw)
        except MalformedMessageError as e:
            logger.debug("Dropped message from session %s: %s", session.id, e.message)
            return []

        try:
            authorize(session, command)
        except AuthorizationError as e:
            # Silently ignored: roles are self-declared and clients expect no reply
            logger.debug("Ignored command from session %s: %s", session.id, e.message)
            return []

        try:
            return self._handlers[command](session, payload)
        except AppError as e:
            logger.info(
                "Rejected %s from session %s: [%d] %s",
                command.value, session.id, e.code, e.message,
            )
            return [_to(Audience.SENDER, ErrorEvent(code=e.code, message=e.message))]
        except (AssertionError, ArithmeticError):
            # Invariant or decimal-context failure; the round was left untouched
            logger.exception(
                "Internal failure handling %s from session %s", command.value, session.id
            )
            internal = InternalError()
            return [_to(Audience.SENDER, ErrorEvent(code=internal.code, message=internal.message))]

    # --- helpers ---

    def _admin_state(self) -> Outbound:
        state = AdminStateOut.from_snapshot(self._machine.snapshot())
        return _to(Audience.ADMINS, StateEvent(state=state))

    def _config_out(self) -> ConfigOut:
        return ConfigOut.from_domain(self._machine.config)

    def _phase_changed(self) -> list[Outbound]:
        event = PhaseEvent(phase=self._machine.phase.value, config=self._config_out())
        return [_to(Audience.ALL, event), self._admin_state()]

    # --- handlers ---

    def _register_admin(self, session: Session, payload: dict[str, Any]) -> list[Outbound]:
        self._registry.bind_role(session, SessionRole.ADMIN)
        state = AdminStateOut.from_snapshot(self._machine.snapshot())
        return [_to(Audience.SENDER, StateEvent(state=state))]

    def _register_participant(self, session: Session, payload: dict[str, Any]) -> list[Outbound]:
        self._registry.bind_role(session, SessionRole.PARTICIPANT)
        event = RegisteredEvent(
            id=int(session.id), config=self._config_out(), phase=self._machine.phase.value
        )
        return [_to(Audience.SENDER, event)]

    def _update_config(self, session: Session, payload: dict[str, Any]) -> list[Outbound]:
        cmd = _load(UpdateConfigCommand, payload, InvalidConfigError)
        self._machine.configure(cmd.config.changes())
        return [
            _to(Audience.ALL, ConfigUpdatedEvent(config=self._config_out())),
            self._admin_state(),
        ]

    def _open_auction(self, session: Session, payload: dict[str, Any]) -> list[Outbound]:
        self._machine.open_auction()
        return self._phase_changed()

    def _submit_tender(self, session: Session, payload: dict[str, Any]) -> list[Outbound]:
        # Phase is reported before payload problems
        check_phase_open(self._machine.phase)
        cmd = _load(SubmitTenderCommand, payload, lambda _detail: InvalidSubmissionError())
        record = self._machine.submit(
            session.id, cmd.name, [t.to_domain() for t in cmd.tenders]
        )
        submitted = SubmittedEvent(tenders=[TenderOut.from_domain(t) for t in record.tenders])
        return [_to(Audience.SENDER, submitted), self._admin_state()]

    def _close_auction(self, session: Session, payload: dict[str, Any]) -> list[Outbound]:
        self._machine.close_auction()
        return self._phase_changed()

    def _calculate(self, session: Session, payload: dict[str, Any]) -> list[Outbound]:
        cmd = _load(CalculateCommand, payload, InvalidStrikePriceError)
        result = self._machine.calculate(cmd.strike_price)
        event = ResultsEvent(
            results=ClearingResultOut.from_domain(result), strike_price=result.strike_price
        )
        return [_to(Audience.ALL, event), self._admin_state()]

    def _reset(self, session: Session, payload: dict[str, Any]) -> list[Outbound]:
        self._machine.reset()
        return self._phase_changed()
