"""Raw TronGrid transaction shapes.

TronGrid returns several incompatible object shapes from the account
endpoints. `parse_raw` inspects an object once and returns one of the variants
below, so classification can dispatch on type instead of on field presence.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from tron_ledger.addresses import is_hex_address

CONTRACT_ADDRESS_FIELDS = ('owner_address', 'to_address', 'contract_address')

@dataclass(frozen=True)
class InternalTransaction:
    """Value moved by a contract during execution of another transaction"""
    tx_id: str
    timestamp: int
    from_address: Optional[str]     # hex, 41-prefixed
    to_address: Optional[str]       # hex, 41-prefixed
    call_value: Optional[Dict[str, Any]]
    rejected: bool

@dataclass(frozen=True)
class ContractTransaction:
    """A top-level transaction carrying a single system contract"""
    tx_id: str
    timestamp: int
    contract_type: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    result: Optional[str] = None    # ret[0].contractRet
    withdraw_amount: Optional[int] = None

@dataclass(frozen=True)
class TokenTransferEvent:
    """A TRC20 event from the token transfer stream"""
    transaction_id: str
    timestamp: int
    event_type: Optional[str]
    from_address: Optional[str]     # base58
    to_address: Optional[str]       # base58
    value: Any
    token_info: Optional[Dict[str, Any]]

@dataclass(frozen=True)
class UnclassifiedTransaction:
    """Anything the parser does not recognise"""
    payload: Dict[str, Any]

RawTransaction = Union[
    InternalTransaction,
    ContractTransaction,
    TokenTransferEvent,
    UnclassifiedTransaction,
]

def _timestamp(obj: Dict[str, Any]) -> int:
    return int(obj.get('block_timestamp') or 0)

def _valid_addresses(values) -> bool:
    """Every present address is a well-formed hex address"""
    return all(value in (None, '') or is_hex_address(value) for value in values)

def _parse_internal(obj: Dict[str, Any]) -> RawTransaction:
    data = obj.get('data') or {}
    if not isinstance(data, dict):
        return UnclassifiedTransaction(payload=obj)
    if not _valid_addresses([obj.get('from_address'), obj.get('to_address')]):
        return UnclassifiedTransaction(payload=obj)
    return InternalTransaction(
        tx_id=obj.get('tx_id') or '',
        timestamp=_timestamp(obj),
        from_address=obj.get('from_address'),
        to_address=obj.get('to_address'),
        call_value=data.get('call_value'),
        rejected=bool(data.get('rejected'))
    )

def _parse_contract(obj: Dict[str, Any]) -> RawTransaction:
    raw_data = obj.get('raw_data') or {}
    contracts = raw_data.get('contract') if isinstance(raw_data, dict) else None
    if not isinstance(contracts, list) or not contracts or not isinstance(contracts[0], dict):
        return UnclassifiedTransaction(payload=obj)

    contract = contracts[0]
    parameter = contract.get('parameter') or {}
    if not isinstance(parameter, dict):
        return UnclassifiedTransaction(payload=obj)
    parameters = parameter.get('value') or {}
    if not isinstance(parameters, dict):
        return UnclassifiedTransaction(payload=obj)
    addresses = [parameters.get(key) for key in CONTRACT_ADDRESS_FIELDS]
    if not _valid_addresses(addresses):
        return UnclassifiedTransaction(payload=obj)

    ret = obj.get('ret') or [{}]
    first = ret[0] if isinstance(ret, list) else None
    result = first.get('contractRet') if isinstance(first, dict) else None

    return ContractTransaction(
        tx_id=obj.get('txID') or '',
        timestamp=_timestamp(obj),
        contract_type=contract.get('type') or '',
        parameters=parameters,
        result=result,
        withdraw_amount=obj.get('withdraw_amount')
    )

def _parse_token_event(obj: Dict[str, Any]) -> RawTransaction:
    if not all(value is None or isinstance(value, str) for value in (obj.get('from'), obj.get('to'))):
        return UnclassifiedTransaction(payload=obj)
    return TokenTransferEvent(
        transaction_id=obj.get('transaction_id') or '',
        timestamp=_timestamp(obj),
        event_type=obj.get('type'),
        from_address=obj.get('from'),
        to_address=obj.get('to'),
        value=obj.get('value'),
        token_info=obj.get('token_info')
    )

def parse_raw(obj: Dict[str, Any]) -> RawTransaction:
    """Map a TronGrid JSON object onto its raw variant"""
    if not isinstance(obj, dict):
        return UnclassifiedTransaction(payload={'value': obj})
    if 'internal_tx_id' in obj:
        return _parse_internal(obj)
    if 'raw_data' in obj:
        return _parse_contract(obj)
    if 'transaction_id' in obj and 'type' in obj:
        return _parse_token_event(obj)
    return UnclassifiedTransaction(payload=obj)
