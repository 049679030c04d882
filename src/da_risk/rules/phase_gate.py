from src.da_common.enums import AuctionPhase
from src.da_common.errors import PhaseError


def check_phase_open(phase: AuctionPhase) -> None:
    """Raise PhaseError(2001) unless tenders are currently being accepted."""
    if phase != AuctionPhase.OPEN:
        raise PhaseError("Auction is not open")
