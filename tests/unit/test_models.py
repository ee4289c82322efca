"""Unit tests for value types."""
from __future__ import annotations

import pytest

from dango_query.models import AccountType, Coin, NodeConfig, Vote, WasmSmartResponse


class TestCoin:
    def test_creation(self) -> None:
        c = Coin(denom="uusdc", amount=100)
        assert c.denom == "uusdc"
        assert c.amount == 100

    def test_frozen(self) -> None:
        c = Coin(denom="uusdc", amount=100)
        with pytest.raises(AttributeError):
            c.amount = 200  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Coin(denom="uusdc", amount=1) == Coin(denom="uusdc", amount=1)


class TestNodeConfig:
    def test_owner_optional(self) -> None:
        assert NodeConfig(bank="0xbank").owner is None


class TestWasmSmartResponse:
    def test_data_defaults_to_none(self) -> None:
        assert WasmSmartResponse(contract="0xabc").data is None


class TestEnums:
    def test_account_type_from_wire(self) -> None:
        assert AccountType("spot") is AccountType.SPOT
        assert AccountType.SAFE.value == "safe"

    def test_account_type_rejects_unknown(self) -> None:
        with pytest.raises(ValueError):
            AccountType("savings")

    def test_vote_is_str(self) -> None:
        assert Vote.YES == "yes"
