"""
Pytest fixtures for tron_ledger tests. TronGrid is replaced by in-memory fakes
that record every request they serve.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from tron_ledger.addresses import hex_to_base58
from tron_ledger.models.api import ApiPage
from tron_ledger.models.ledger import AssetInfo

OWNER_HEX = "41" + "a1" * 20
OTHER_HEX = "41" + "b2" * 20
CONTRACT_HEX = "41" + "c3" * 20
OWNER = hex_to_base58(OWNER_HEX)
OTHER = hex_to_base58(OTHER_HEX)
CONTRACT = hex_to_base58(CONTRACT_HEX)


class FakeTronGrid:
    """Stands in for TronGridAPI.execute. The responder returns an ApiPage or a data list."""

    def __init__(self, responder: Callable[[str, dict], Any]):
        self.responder = responder
        self.calls: list[tuple[str, dict]] = []

    def execute(self, endpoint, params=None):
        params = dict(params or {})
        self.calls.append((endpoint, params))
        result = self.responder(endpoint, params)
        if isinstance(result, ApiPage):
            return result
        return ApiPage(success=True, data=result)


class WindowedSource:
    """
    Serves a newest-first record list the way TronGrid windows it: records at or
    below max_timestamp, truncated to limit. `truncate` maps the index of a call
    to a shorter length to simulate the early cutoff quirk.
    """

    def __init__(self, records: list[dict], truncate: dict[int, int] | None = None):
        self.records = records
        self.truncate = truncate or {}
        self.served = 0

    def __call__(self, endpoint: str, params: dict) -> list[dict]:
        index = self.served
        self.served += 1
        max_ts = params.get("max_timestamp")
        window = [
            r for r in self.records
            if max_ts is None or r["block_timestamp"] <= max_ts
        ]
        page = window[: params["limit"]]
        if index in self.truncate:
            page = page[: self.truncate[index]]
        return [dict(r) for r in page]


class StubResolver:
    """Resolver double with a fixed asset table; counts lookups."""

    def __init__(self, assets: dict[str, AssetInfo] | None = None):
        self.assets = assets or {}
        self.lookups: list[str] = []

    def resolve(self, identifier):
        self.lookups.append(str(identifier))
        return self.assets[str(identifier)]


def make_records(timestamps: list[int]) -> list[dict]:
    """Raw transaction dicts with distinct IDs, in the given order."""
    return [
        {"txID": f"tx{i:04d}", "block_timestamp": ts}
        for i, ts in enumerate(timestamps)
    ]


@pytest.fixture
def btt():
    return AssetInfo(id="1002000", symbol="BTT", name="BitTorrent", decimals=6)


@pytest.fixture
def resolver(btt):
    return StubResolver({"1002000": btt, "BitTorrent": btt})
