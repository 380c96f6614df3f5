"""
End-to-end tests for ledger reconstruction against a fake TronGrid, including the
command-line entry point.
"""

from __future__ import annotations

import csv
from unittest import mock

import pytest

import tron_ledger.__main__ as cli
from conftest import OTHER, OTHER_HEX, OWNER, OWNER_HEX, FakeTronGrid, WindowedSource
from tron_ledger.errors import PaginationError
from tron_ledger.ledger import LedgerBuilder
from tron_ledger.models.ledger import TransactionType, TransferType
from tron_ledger.services.assets import AssetResolver
from tron_ledger.services.pagination import PaginatedFetcher

ADDRESS = OWNER
TX_ENDPOINT = f"/v1/accounts/{ADDRESS}/transactions"
TRC20_ENDPOINT = f"/v1/accounts/{ADDRESS}/transactions/trc20"
ASSET_ENDPOINT = "/v1/assets/1002000"


def _transfer(tx_id, ts, amount):
    return {
        "txID": tx_id,
        "block_timestamp": ts,
        "ret": [{"contractRet": "SUCCESS"}],
        "raw_data": {"contract": [{
            "type": "TransferContract",
            "parameter": {"value": {"amount": amount, "owner_address": OWNER_HEX, "to_address": OTHER_HEX}},
        }]},
    }


def _internal(tx_id, ts, call_value):
    return {
        "internal_tx_id": f"i-{tx_id}",
        "tx_id": tx_id,
        "block_timestamp": ts,
        "from_address": OTHER_HEX,
        "to_address": OWNER_HEX,
        "data": {"call_value": call_value, "rejected": False},
    }


def _trc20(tx_id, ts, value):
    return {
        "transaction_id": tx_id,
        "block_timestamp": ts,
        "from": OTHER,
        "to": OWNER,
        "type": "Transfer",
        "value": value,
        "token_info": {"symbol": "USDT", "address": "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t", "decimals": 6, "name": "Tether USD"},
    }


def _builder(transactions, token_events, page_size=3):
    sources = {TX_ENDPOINT: WindowedSource(transactions), TRC20_ENDPOINT: WindowedSource(token_events)}

    def responder(endpoint, params):
        if endpoint == ASSET_ENDPOINT:
            return [{"id": "1002000", "abbr": "BTT", "name": "BitTorrent", "precision": 6}]
        return sources[endpoint](endpoint, params)

    client = FakeTronGrid(responder)
    fetcher = PaginatedFetcher(client, page_size=page_size, cutoff_retries=1)
    return LedgerBuilder(fetcher, AssetResolver(client)), client


def test_build_merges_both_streams_newest_first():
    transactions = [
        _transfer("t5", 500, 1000000),
        _internal("t4", 400, {"1002000": 3000000}),
        {"txID": "t3", "block_timestamp": 300, "raw_data": {"contract": [{"type": "VoteWitnessContract", "parameter": {"value": {}}}]}},
        _internal("t2", 200, {"_": 5000000}),
        _internal("t1", 100, {"1002000": 1}),
    ]
    token_events = [_trc20("e4", 450, "2500000"), _trc20("e1", 100, "7")]
    builder, client = _builder(transactions, token_events)

    ledger = builder.build(ADDRESS)

    assert [r.transaction_id for r in ledger] == ["t5", "e4", "t4", "t2", "t1", "e1"]
    assert ledger[1].transfer_type is TransferType.TOKEN_CONTRACT
    assert ledger[2].asset_symbol == "BTT"
    assert ledger[3].amount == "5.000000"
    assert ledger[3].transaction_type is TransactionType.INTERNAL
    # the asset was resolved once for both internal transfers
    assert [c[0] for c in client.calls].count(ASSET_ENDPOINT) == 1
    # streams are requested one after the other
    endpoints = [c[0] for c in client.calls if c[0] != ASSET_ENDPOINT]
    first_trc20 = endpoints.index(TRC20_ENDPOINT)
    assert TX_ENDPOINT not in endpoints[first_trc20:]


def test_build_with_no_history():
    builder, _ = _builder([], [])
    assert builder.build(ADDRESS) == []


def test_identical_timestamps_abort_the_build():
    transactions = [_transfer(f"t{i}", 1000, 1) for i in range(4)]
    builder, _ = _builder(transactions, [])
    with pytest.raises(PaginationError, match="identical timestamp"):
        builder.build(ADDRESS)


def test_cli_writes_ledger(tmp_path):
    builder, _ = _builder([_transfer("t1", 1600000000000, 2500000)], [])
    output = tmp_path / "ledger.csv"
    with mock.patch.object(LedgerBuilder, "from_settings", return_value=builder):
        cli.run([ADDRESS, str(output)])

    with open(output, newline="") as f:
        rows = list(csv.reader(f))
    assert rows == [["t1", "1600000000000", "Transfer", "Native", OWNER, OTHER, "2.500000", "TRX", "Tronix", "_"]]


def test_cli_fatal_error_exits_nonzero_without_output(tmp_path):
    transactions = [_transfer(f"t{i}", 1000, 1) for i in range(3)]
    builder, _ = _builder(transactions, [])
    output = tmp_path / "ledger.csv"
    with mock.patch.object(LedgerBuilder, "from_settings", return_value=builder):
        with pytest.raises(SystemExit) as exc:
            cli.run([ADDRESS, str(output)])
    assert exc.value.code == 1
    assert not output.exists()
    assert list(tmp_path.iterdir()) == []
