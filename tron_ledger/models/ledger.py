"""Domain models for the normalized ledger"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

NATIVE_ASSET_ID = '_'
NATIVE_SYMBOL = 'TRX'
NATIVE_NAME = 'Tronix'
NATIVE_DECIMALS = 6

class TransactionType(Enum):
    """How the value moved"""
    INTERNAL = 'Internal'
    TRANSFER = 'Transfer'
    TRIGGER = 'Trigger'
    WITHDRAW = 'Withdraw'

class TransferType(Enum):
    """Which kind of unit moved"""
    NATIVE = 'Native'
    ASSET = 'Asset'
    TOKEN_CONTRACT = 'TokenContract'

@dataclass(frozen=True)
class AssetInfo:
    """Resolved TRC10 asset metadata"""
    id: str
    symbol: str
    name: str
    decimals: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'AssetInfo':
        """Build from a TronGrid asset object. Missing precision means 0."""
        return cls(
            id=str(data['id']),
            symbol=data.get('abbr') or '',
            name=data.get('name') or '',
            decimals=int(data.get('precision') or 0)
        )

NATIVE_ASSET = AssetInfo(
    id=NATIVE_ASSET_ID,
    symbol=NATIVE_SYMBOL,
    name=NATIVE_NAME,
    decimals=NATIVE_DECIMALS
)

LEDGER_COLUMNS = [
    'transaction_id',
    'timestamp',
    'transaction_type',
    'transfer_type',
    'from_address',
    'to_address',
    'amount',
    'asset_symbol',
    'asset_name',
    'asset_id',
]

@dataclass(frozen=True)
class CanonicalRecord:
    """One value transfer in the ledger"""
    transaction_id: str
    timestamp: int                   # milliseconds since epoch
    transaction_type: TransactionType
    transfer_type: TransferType
    from_address: Optional[str]      # None for Withdraw
    to_address: Optional[str]
    amount: str                      # fixed-point, exactly `decimals` fraction digits
    asset_symbol: str
    asset_name: str
    asset_id: str

    def to_row(self) -> List[str]:
        """Flatten into the 10-field ledger row"""
        return [
            self.transaction_id,
            str(self.timestamp),
            self.transaction_type.value,
            self.transfer_type.value,
            self.from_address or '',
            self.to_address or '',
            self.amount,
            self.asset_symbol,
            self.asset_name,
            self.asset_id,
        ]
