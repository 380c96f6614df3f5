"""Maps raw TronGrid transactions onto canonical ledger records"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from tron_ledger.addresses import hex_to_base58
from tron_ledger.amounts import is_positive_amount, scale_amount
from tron_ledger.errors import ClassificationError
from tron_ledger.models.ledger import (
    NATIVE_ASSET,
    NATIVE_ASSET_ID,
    AssetInfo,
    CanonicalRecord,
    TransactionType,
    TransferType,
)
from tron_ledger.models.raw import (
    ContractTransaction,
    InternalTransaction,
    RawTransaction,
    TokenTransferEvent,
    UnclassifiedTransaction,
    parse_raw,
)

logger = logging.getLogger(__name__)

SUCCESS = 'SUCCESS'

def _record(tx_id: str, timestamp: int, transaction_type: TransactionType,
            transfer_type: TransferType, from_address: Optional[str],
            to_address: Optional[str], raw_amount, asset: AssetInfo) -> CanonicalRecord:
    return CanonicalRecord(
        transaction_id=tx_id,
        timestamp=timestamp,
        transaction_type=transaction_type,
        transfer_type=transfer_type,
        from_address=from_address,
        to_address=to_address,
        amount=scale_amount(raw_amount, asset.decimals),
        asset_symbol=asset.symbol,
        asset_name=asset.name,
        asset_id=asset.id
    )

# -------------------------
# Internal transfers
# -------------------------
def classify_internal(tx: InternalTransaction, resolver) -> Optional[CanonicalRecord]:
    if tx.rejected or not isinstance(tx.call_value, dict) or not tx.call_value:
        return None
    if len(tx.call_value) != 1:
        raise ClassificationError(
            f"Unhandled number of assets in call value {len(tx.call_value)} "
            f"for internal transaction {tx.tx_id}"
        )

    (key, value), = tx.call_value.items()
    if not is_positive_amount(value):
        return None

    if key == NATIVE_ASSET_ID:
        asset, transfer_type = NATIVE_ASSET, TransferType.NATIVE
    else:
        asset, transfer_type = resolver.resolve(key), TransferType.ASSET

    return _record(
        tx.tx_id, tx.timestamp, TransactionType.INTERNAL, transfer_type,
        hex_to_base58(tx.from_address), hex_to_base58(tx.to_address),
        value, asset
    )

# -------------------------
# Contract transactions
# -------------------------
def _transfer(tx: ContractTransaction, resolver) -> Optional[CanonicalRecord]:
    amount = tx.parameters.get('amount')
    if not is_positive_amount(amount) or tx.result != SUCCESS:
        return None
    return _record(
        tx.tx_id, tx.timestamp, TransactionType.TRANSFER, TransferType.NATIVE,
        hex_to_base58(tx.parameters.get('owner_address')),
        hex_to_base58(tx.parameters.get('to_address')),
        amount, NATIVE_ASSET
    )

def _transfer_asset(tx: ContractTransaction, resolver) -> Optional[CanonicalRecord]:
    amount = tx.parameters.get('amount')
    asset_name = tx.parameters.get('asset_name')
    if not is_positive_amount(amount) or not asset_name:
        return None
    return _record(
        tx.tx_id, tx.timestamp, TransactionType.TRANSFER, TransferType.ASSET,
        hex_to_base58(tx.parameters.get('owner_address')),
        hex_to_base58(tx.parameters.get('to_address')),
        amount, resolver.resolve(asset_name)
    )

def _trigger(tx: ContractTransaction, resolver) -> Optional[CanonicalRecord]:
    owner = hex_to_base58(tx.parameters.get('owner_address'))
    contract = hex_to_base58(tx.parameters.get('contract_address'))

    call_value = tx.parameters.get('call_value')
    if is_positive_amount(call_value):
        return _record(
            tx.tx_id, tx.timestamp, TransactionType.TRIGGER, TransferType.NATIVE,
            owner, contract, call_value, NATIVE_ASSET
        )

    token_value = tx.parameters.get('call_token_value')
    token_id = tx.parameters.get('token_id')
    if is_positive_amount(token_value) and token_id:
        return _record(
            tx.tx_id, tx.timestamp, TransactionType.TRIGGER, TransferType.TOKEN_CONTRACT,
            owner, contract, token_value, resolver.resolve(token_id)
        )

    return None

def _withdraw(tx: ContractTransaction, resolver) -> Optional[CanonicalRecord]:
    if not is_positive_amount(tx.withdraw_amount):
        return None
    return _record(
        tx.tx_id, tx.timestamp, TransactionType.WITHDRAW, TransferType.NATIVE,
        None, hex_to_base58(tx.parameters.get('owner_address')),
        tx.withdraw_amount, NATIVE_ASSET
    )

CONTRACT_HANDLERS = {
    'TransferContract': _transfer,
    'TransferAssetContract': _transfer_asset,
    'TriggerSmartContract': _trigger,
    'WithdrawBalanceContract': _withdraw,
}

def classify_contract(tx: ContractTransaction, resolver) -> Optional[CanonicalRecord]:
    handler = CONTRACT_HANDLERS.get(tx.contract_type)
    if handler is None:
        return None
    return handler(tx, resolver)

# -------------------------
# TRC20 events
# -------------------------
def classify_token_event(event: TokenTransferEvent) -> Optional[CanonicalRecord]:
    info = event.token_info
    if event.event_type != 'Transfer' or not isinstance(info, dict) or not info:
        return None
    if not is_positive_amount(event.value):
        return None
    try:
        decimals = int(info.get('decimals') or 0)
    except (TypeError, ValueError):
        return None
    if decimals < 0:
        return None

    token = AssetInfo(
        id=info.get('address') or '',
        symbol=info.get('symbol') or '',
        name=info.get('name') or '',
        decimals=decimals
    )
    return _record(
        event.transaction_id, event.timestamp, TransactionType.TRANSFER,
        TransferType.TOKEN_CONTRACT, event.from_address or None,
        event.to_address or None, event.value, token
    )

# -------------------------
# Dispatch
# -------------------------
def classify(raw: RawTransaction, resolver) -> Optional[CanonicalRecord]:
    """
    Classify one raw transaction.

    Returns None for shapes that carry no value transfer. Raises only when
    the data cannot be represented without guessing (multi-asset internal
    transfers) or an asset cannot be resolved.
    """
    if isinstance(raw, InternalTransaction):
        return classify_internal(raw, resolver)
    if isinstance(raw, ContractTransaction):
        return classify_contract(raw, resolver)
    if isinstance(raw, TokenTransferEvent):
        return classify_token_event(raw)
    if isinstance(raw, UnclassifiedTransaction):
        return None
    raise TypeError(f"Not a raw transaction variant: {type(raw).__name__}")

def classify_all(objects: Iterable[Dict[str, Any]], resolver) -> List[CanonicalRecord]:
    """Parse and classify a batch of API objects, dropping the absent ones"""
    records = []
    skipped = 0
    for obj in objects:
        record = classify(parse_raw(obj), resolver)
        if record is None:
            skipped += 1
        else:
            records.append(record)
    if skipped:
        logger.debug(f"Skipped {skipped} transactions without a value transfer")
    return records
