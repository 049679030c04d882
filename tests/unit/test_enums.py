"""Tests for da_common.enums — values are the websocket wire strings."""

from src.da_common.enums import AuctionPhase, ClearingPolicyName, CommandType, SessionRole


class TestWireValues:
    def test_phases(self) -> None:
        assert [p.value for p in AuctionPhase] == ["waiting", "open", "closed", "results"]

    def test_commands(self) -> None:
        assert {c.value for c in CommandType} == {
            "register-admin", "register-participant", "update-config", "open-auction",
            "submit-tender", "close-auction", "calculate", "reset",
        }

    def test_enums_are_str(self) -> None:
        assert isinstance(SessionRole.ADMIN, str)
        assert ClearingPolicyName.AUTO == "auto"
        assert CommandType("reset") is CommandType.RESET
