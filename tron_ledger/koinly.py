"""Convert a ledger CSV into a Koinly universal import file.

Usage: python -m tron_ledger.koinly TRON-ADDRESS input.csv output.csv
"""
import argparse
import csv
import logging
import re
import sys
import traceback
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import List, Optional

from tron_ledger.models.ledger import LEDGER_COLUMNS, TransactionType
from tron_ledger.services.export import read_ledger

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

KOINLY_HEADERS = {
    'date': 'Date',
    'sent_amount': 'Sent Amount',
    'sent_currency': 'Sent Currency',
    'received_amount': 'Received Amount',
    'received_currency': 'Received Currency',
    'label': 'Label',
    'description': 'Description',
    'tx_hash': 'TxHash',
}

STAKING_LABEL = 'staking'
_LEADING_DIGITS = re.compile(r'^\d+')

@dataclass
class KoinlyRow:
    date: str = ''
    sent_amount: str = ''
    sent_currency: str = ''
    received_amount: str = ''
    received_currency: str = ''
    label: str = ''
    description: str = ''
    tx_hash: str = ''

def format_date(timestamp_ms: int) -> str:
    """Millisecond epoch to `YYYY-MM-DD HH:MM:SS UTC`"""
    moment = datetime.fromtimestamp(timestamp_ms // 1000, tz=timezone.utc)
    return moment.strftime('%Y-%m-%d %H:%M:%S UTC')

def describe(transaction_type: str, transfer_type: str, from_address: str, to_address: str) -> str:
    description = f"{transaction_type} {transfer_type}"
    if from_address:
        description += f" from {from_address}"
    if to_address:
        description += f" to {to_address}"
    return description

def convert_row(row: List[str], index: int, address: str) -> Optional[KoinlyRow]:
    """
    Convert one ledger row relative to the focal address.

    Returns None for rows where the address is neither sender nor receiver.

    Raises:
        ValueError: If the row is malformed
    """
    if len(row) != len(LEDGER_COLUMNS):
        raise ValueError(f"Record {index + 1} has wrong length")
    (transaction_id, timestamp, transaction_type, transfer_type, from_address,
     to_address, amount, asset_symbol, asset_name, asset_id) = row

    date = ''
    if timestamp:
        match = _LEADING_DIGITS.match(timestamp)
        if not match:
            raise ValueError(f"Record {index + 1} has invalid timestamp")
        date = format_date(int(match.group(0)))

    currency = f"{asset_symbol} ({asset_name}; {asset_id})"
    label = STAKING_LABEL if transaction_type == TransactionType.WITHDRAW.value else ''
    description = describe(transaction_type, transfer_type, from_address, to_address)

    if from_address == address:
        return KoinlyRow(date=date, sent_amount=amount, sent_currency=currency,
                         label=label, description=description, tx_hash=transaction_id)
    if to_address == address:
        return KoinlyRow(date=date, received_amount=amount, received_currency=currency,
                         label=label, description=description, tx_hash=transaction_id)
    return None

def convert(rows: List[List[str]], address: str) -> List[KoinlyRow]:
    converted = (convert_row(row, i, address) for i, row in enumerate(rows))
    return [row for row in converted if row is not None]

def write_koinly(rows: List[KoinlyRow], path: str) -> None:
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=list(KOINLY_HEADERS))
        writer.writerow(KOINLY_HEADERS)
        for row in rows:
            writer.writerow(asdict(row))

def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Convert a TRON ledger CSV into Koinly format')
    parser.add_argument('address', help='TRON address the ledger belongs to')
    parser.add_argument('input', help='Ledger CSV produced by tron_ledger')
    parser.add_argument('output', help='Koinly CSV to write')
    args = parser.parse_args(argv)

    try:
        rows = convert(read_ledger(args.input), args.address)
        write_koinly(rows, args.output)
        logger.info(f"Wrote {len(rows)} Koinly records to {args.output}")
    except Exception as e:
        logger.error(f"Error converting ledger: {e}")
        traceback.print_exc()
        sys.exit(1)

if __name__ == '__main__':
    main()
