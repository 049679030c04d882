"""Read-only HTTP view of the live round (public, aggregate fields only)."""
from fastapi import APIRouter, Request

from src.da_auction.application.snapshots import PublicStateOut
from src.da_auction.domain.state_machine import AuctionStateMachine
from src.da_common.response import ApiResponse, success_response

router = APIRouter(prefix="/auction", tags=["auction"])


@router.get("")
async def get_auction(request: Request) -> ApiResponse:
    machine: AuctionStateMachine = request.app.state.machine
    state = PublicStateOut.from_snapshot(machine.snapshot())
    return success_response(
        state.to_wire(), request_id=getattr(request.state, "request_id", None)
    )
