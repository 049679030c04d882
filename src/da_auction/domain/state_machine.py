"""AuctionStateMachine — sole owner of the live round.

Phases: waiting -> open -> closed -> results, with reset back to waiting
from anywhere. Role checks happen in the dispatcher before any method here
is called; this class only guards phases and data.

Every method runs to completion without awaiting, so each command mutates
the round atomically on the event loop.
"""
import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from decimal import Decimal
from typing import Any

from src.da_auction.domain.models import (
    AuctionConfig,
    ParticipantRecord,
    RawTender,
    RoundSnapshot,
    RoundState,
)
from src.da_clearing.domain.models import ClearingResult
from src.da_clearing.domain.service import clear_round
from src.da_common.datetime_utils import utc_now
from src.da_common.enums import AuctionPhase
from src.da_common.errors import InvalidConfigError
from src.da_risk.rules.config_bounds import check_config
from src.da_risk.rules.phase_gate import check_phase_open
from src.da_risk.validator import validate_tenders

logger = logging.getLogger(__name__)


class AuctionStateMachine:
    def __init__(self, config: AuctionConfig | None = None) -> None:
        self._config = config or AuctionConfig.from_settings()
        self._round = RoundState()

    @property
    def phase(self) -> AuctionPhase:
        return self._round.phase

    @property
    def config(self) -> AuctionConfig:
        return self._config

    def configure(self, changes: Mapping[str, Any]) -> AuctionConfig:
        """Merge changes into the config. Allowed in any phase.

        Tenders already stored are not re-validated against the new band.
        """
        try:
            candidate = replace(self._config, **changes)
        except TypeError as e:
            raise InvalidConfigError(str(e)) from e
        check_config(candidate)
        self._config = candidate
        logger.info("Config updated: %s", ", ".join(sorted(changes)) or "no changes")
        return candidate

    def open_auction(self) -> None:
        self._round.wipe()
        self._set_phase(AuctionPhase.OPEN)

    def submit(
        self, participant_id: str, name: str, raw_tenders: Iterable[RawTender]
    ) -> ParticipantRecord:
        """Validate and store a participant's tenders, replacing any earlier submission."""
        check_phase_open(self._round.phase)
        tenders = validate_tenders(raw_tenders, self._config)
        record = ParticipantRecord(
            participant_id=participant_id,
            name=name,
            tenders=tenders,
            submitted_at=utc_now(),
        )
        replaced = participant_id in self._round.participants
        self._round.participants[participant_id] = record
        logger.info(
            "Tender %s: participant=%s name=%r tenders=%d qty=%d",
            "replaced" if replaced else "accepted",
            participant_id, name, len(tenders), record.total_qty,
        )
        return record

    def close_auction(self) -> None:
        """Freeze submissions. Earlier results are discarded; tenders are kept."""
        self._round.strike_price = None
        self._round.results = None
        self._set_phase(AuctionPhase.CLOSED)

    def calculate(self, strike_price: Decimal | None = None) -> ClearingResult:
        """Clear the round. On error (e.g. NoTendersError) nothing changes."""
        result = clear_round(self._round.participants, self._config, strike_price)
        self._round.strike_price = result.strike_price
        self._round.results = result
        self._set_phase(AuctionPhase.RESULTS)
        return result

    def reset(self) -> None:
        self._round.wipe()
        self._set_phase(AuctionPhase.WAITING)

    def snapshot(self) -> RoundSnapshot:
        return RoundSnapshot(
            config=self._config,
            phase=self._round.phase,
            participants=dict(self._round.participants),
            strike_price=self._round.strike_price,
            results=self._round.results,
        )

    def _set_phase(self, phase: AuctionPhase) -> None:
        previous = self._round.phase
        self._round.phase = phase
        logger.info("Phase %s -> %s", previous.value, phase.value)
