"""Ledger reconstruction for a single account"""
import logging
from typing import List

from tron_ledger.classifier import classify_all
from tron_ledger.config import Settings
from tron_ledger.merge import merge
from tron_ledger.models.ledger import CanonicalRecord
from tron_ledger.services.assets import AssetResolver
from tron_ledger.services.pagination import PaginatedFetcher
from tron_ledger.services.trongrid import TronGridAPI

logger = logging.getLogger(__name__)

class LedgerBuilder:
    """Fetches, classifies and merges every value transfer of an account"""

    def __init__(self, fetcher: PaginatedFetcher, resolver: AssetResolver):
        self.fetcher = fetcher
        self.resolver = resolver

    @classmethod
    def from_settings(cls, settings: Settings) -> 'LedgerBuilder':
        """Wire up a client, fetcher and resolver for one run"""
        client = TronGridAPI.from_settings(settings)
        return cls(
            PaginatedFetcher.from_settings(client, settings),
            AssetResolver(client, page_size=settings.ASSET_PAGE_SIZE)
        )

    def fetch_transactions(self, address: str) -> List[CanonicalRecord]:
        """Native, TRC10, trigger, withdraw and internal transfers"""
        logger.info(f"Downloading all transactions for address {address}...")
        raw = self.fetcher.fetch_all(
            TronGridAPI.account_transactions_endpoint(address),
            {'order_by': 'block_timestamp,desc'}
        )
        records = classify_all(raw, self.resolver)
        logger.info(f"Found {len(records)} transfers in {len(raw)} downloaded transactions")
        return records

    def fetch_token_transfers(self, address: str) -> List[CanonicalRecord]:
        """TRC20 transfer events"""
        logger.info(f"Downloading TRC20 transfers for address {address}...")
        raw = self.fetcher.fetch_all(
            TronGridAPI.account_trc20_endpoint(address),
            {'order_by': 'block_timestamp,desc'}
        )
        records = classify_all(raw, self.resolver)
        logger.info(f"Found {len(records)} transfers in {len(raw)} downloaded TRC20 events")
        return records

    def build(self, address: str) -> List[CanonicalRecord]:
        """
        Reconstruct the full ledger, newest first.

        Streams are pulled one after another; nothing is returned unless
        both complete.

        Raises:
            LedgerError: On retry exhaustion or any structural violation
        """
        transactions = self.fetch_transactions(address)
        token_transfers = self.fetch_token_transfers(address)
        ledger = merge(transactions, token_transfers)
        logger.info(
            f"Merged {len(ledger)} records "
            f"({len(self.resolver.cache)} distinct asset lookups cached)"
        )
        return ledger
