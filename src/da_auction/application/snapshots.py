"""Round snapshots as sent to clients.

AdminStateOut: full view for admin sessions (per-participant summary, strike,
results). Never includes tender detail outside of results.
PublicStateOut: aggregate view safe for any session.
"""
from src.da_auction.application.schemas import ConfigOut
from src.da_auction.domain.models import ParticipantRecord, RoundSnapshot
from src.da_clearing.application.schemas import ClearingResultOut
from src.da_common.datetime_utils import to_epoch_ms
from src.da_common.money import WireDecimal
from src.da_common.wire import WireModel


class ParticipantSummaryOut(WireModel):
    name: str
    tender_count: int
    submitted_at: int  # epoch ms

    @classmethod
    def from_domain(cls, record: ParticipantRecord) -> "ParticipantSummaryOut":
        return cls(
            name=record.name,
            tender_count=len(record.tenders),
            submitted_at=to_epoch_ms(record.submitted_at),
        )


class AdminStateOut(WireModel):
    config: ConfigOut
    phase: str
    participant_count: int
    participants: dict[str, ParticipantSummaryOut]
    strike_price: WireDecimal | None
    results: ClearingResultOut | None

    @classmethod
    def from_snapshot(cls, snap: RoundSnapshot) -> "AdminStateOut":
        return cls(
            config=ConfigOut.from_domain(snap.config),
            phase=snap.phase.value,
            participant_count=snap.participant_count,
            participants={
                pid: ParticipantSummaryOut.from_domain(rec)
                for pid, rec in snap.participants.items()
            },
            strike_price=snap.strike_price,
            results=ClearingResultOut.from_domain(snap.results) if snap.results else None,
        )


class PublicStateOut(WireModel):
    config: ConfigOut
    phase: str
    participant_count: int

    @classmethod
    def from_snapshot(cls, snap: RoundSnapshot) -> "PublicStateOut":
        return cls(
            config=ConfigOut.from_domain(snap.config),
            phase=snap.phase.value,
            participant_count=snap.participant_count,
        )
