"""Timestamp-windowed pagination over TronGrid account endpoints"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tron_ledger.errors import PaginationError

logger = logging.getLogger(__name__)

TIMESTAMP_FIELD = 'block_timestamp'

@dataclass
class PageCursor:
    """Where the next page starts and what it must begin with"""
    max_timestamp: int
    pivot: List[Dict[str, Any]] = field(default_factory=list)

def _timestamp(record: Dict[str, Any]) -> int:
    value = record.get(TIMESTAMP_FIELD)
    if value is None:
        raise PaginationError(f"Record without {TIMESTAMP_FIELD}: {record}")
    return int(value)

class PaginatedFetcher:
    """
    Pulls a complete, newest-first result set from an account endpoint.

    TronGrid pages are windowed with an inclusive `max_timestamp` rather
    than a stable cursor. Each page after the first is requested with the
    timestamp of the previous page's last record, so it must start with the
    trailing run of records sharing that timestamp (the pivot). Checking that
    overlap proves nothing was skipped or duplicated between pages.
    """

    def __init__(self, client, page_size: int = 200, cutoff_retries: int = 4):
        self.client = client
        self.page_size = page_size
        self.cutoff_retries = cutoff_retries

    @classmethod
    def from_settings(cls, client, settings) -> 'PaginatedFetcher':
        return cls(client, page_size=settings.PAGE_SIZE, cutoff_retries=settings.CUTOFF_RETRIES)

    def _cursor_after(self, page: List[Dict[str, Any]]) -> PageCursor:
        """Locate the pivot slice at the end of a full page"""
        boundary = _timestamp(page[-1])
        start = len(page) - 1
        while start > 0 and _timestamp(page[start - 1]) == boundary:
            start -= 1
        if start == 0:
            raise PaginationError(
                f"Too many records at identical timestamp {boundary}: "
                f"all {len(page)} records of the page share it"
            )
        return PageCursor(max_timestamp=boundary, pivot=page[start:])

    def _fetch_window(self, endpoint: str, params: Dict[str, Any], cursor: PageCursor) -> List[Dict[str, Any]]:
        """Fetch the page ending at the cursor, re-asking when it looks cut off"""
        window = {**params, 'limit': self.page_size, 'max_timestamp': cursor.max_timestamp}
        page = self.client.execute(endpoint, window).data

        attempt = 0
        while len(page) < self.page_size and attempt < self.cutoff_retries:
            attempt += 1
            logger.info(
                f"Got {len(page)} of {self.page_size} records at max_timestamp "
                f"{cursor.max_timestamp}, re-requesting in case of early cutoff "
                f"({attempt}/{self.cutoff_retries})"
            )
            page = self.client.execute(endpoint, window).data

        return page

    @staticmethod
    def _verify_overlap(page: List[Dict[str, Any]], cursor: PageCursor) -> None:
        overlap = len(cursor.pivot)
        if page[:overlap] != cursor.pivot:
            raise PaginationError(
                f"Page at max_timestamp {cursor.max_timestamp} does not start with the "
                f"{overlap} records that ended the previous page"
            )

    def fetch_all(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Fetch every record an endpoint has for the account.

        Returns:
            List of raw records, newest first, without duplicates

        Raises:
            PaginationError: If pages cannot be stitched together safely
            RetryExhaustedError: If a request keeps failing
        """
        params = dict(params or {})
        page = self.client.execute(endpoint, {**params, 'limit': self.page_size}).data
        if not page:
            logger.warning(f"No records returned from {endpoint}")
            return []

        records = list(page)
        logger.info(f"Reached timestamp {_timestamp(page[-1])} ({len(records)} records)")

        while len(page) == self.page_size:
            cursor = self._cursor_after(page)
            page = self._fetch_window(endpoint, params, cursor)
            self._verify_overlap(page, cursor)

            records.extend(page[len(cursor.pivot):])
            logger.info(f"Reached timestamp {_timestamp(page[-1])} ({len(records)} records)")

        return records
