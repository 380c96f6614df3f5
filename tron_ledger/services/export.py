"""CSV ledger file handling"""
import csv
import logging
import os
import tempfile
from typing import Iterable, List

from tron_ledger.models.ledger import CanonicalRecord

logger = logging.getLogger(__name__)

def write_ledger(records: Iterable[CanonicalRecord], path: str) -> int:
    """
    Write ledger rows to a headerless CSV file.

    Rows go to a temporary file beside the target which replaces it only
    once every row is written.

    Returns:
        int: Number of rows written
    """
    directory = os.path.dirname(os.path.abspath(path))
    fd, temp_path = tempfile.mkstemp(prefix='.ledger-', suffix='.csv', dir=directory)
    count = 0
    try:
        with os.fdopen(fd, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            for record in records:
                writer.writerow(record.to_row())
                count += 1
        os.replace(temp_path, path)
    except BaseException:
        os.unlink(temp_path)
        raise

    logger.info(f"Successfully written {count} records to {path}")
    return count

def read_ledger(path: str) -> List[List[str]]:
    """Read raw ledger rows back. Row width is checked by the consumer."""
    with open(path, 'r', newline='', encoding='utf-8') as f:
        return [row for row in csv.reader(f)]