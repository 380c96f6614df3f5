"""Deterministic ordering of records drawn from independent streams"""
from itertools import chain
from typing import Iterable, List, Tuple

from tron_ledger.models.ledger import CanonicalRecord, TransactionType


def order_key(record: CanonicalRecord) -> Tuple:
    """
    Sort key for a descending sort.

    Newest first, then transaction ID descending. When both tie, the
    non-Trigger view of a transaction precedes its Trigger view. The full
    row breaks any remaining tie so the result does not depend on which
    stream a record came from.
    """
    return (
        record.timestamp,
        record.transaction_id,
        record.transaction_type is not TransactionType.TRIGGER,
        tuple(record.to_row()),
    )


def merge(*sequences: Iterable[CanonicalRecord]) -> List[CanonicalRecord]:
    """Combine classified sequences into one newest-first ledger"""
    return sorted(chain.from_iterable(sequences), key=order_key, reverse=True)
