"""TRC10 asset metadata lookup"""
import logging
from typing import Dict, Optional

from tron_ledger.amounts import is_digits
from tron_ledger.errors import AssetNotFoundError
from tron_ledger.models.ledger import AssetInfo
from tron_ledger.services.trongrid import TronGridAPI

logger = logging.getLogger(__name__)

class AssetCache:
    """Resolved assets keyed by the identifier used to request them.

    Two keys (an ID and a name) may point at the same asset. Entries are
    never refreshed during a run.
    """

    def __init__(self):
        self._entries: Dict[str, AssetInfo] = {}

    def get(self, identifier: str) -> Optional[AssetInfo]:
        return self._entries.get(identifier)

    def put(self, identifier: str, asset: AssetInfo) -> None:
        self._entries[identifier] = asset

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

class AssetResolver:
    """Resolves TRC10 asset IDs or names to symbol, name and precision"""

    def __init__(self, client, page_size: int = 20, cache: Optional[AssetCache] = None):
        self.client = client
        self.page_size = page_size
        self.cache = cache if cache is not None else AssetCache()

    def resolve(self, identifier) -> AssetInfo:
        """
        Look up an asset by numeric ID or exact name.

        Raises:
            AssetNotFoundError: If no asset matches
            RetryExhaustedError: If the directory cannot be queried
        """
        identifier = str(identifier)
        cached = self.cache.get(identifier)
        if cached is not None:
            return cached

        if is_digits(identifier):
            asset = self._resolve_id(identifier)
        else:
            asset = self._resolve_name(identifier)

        logger.info(f"Resolved asset {identifier} to {asset.symbol} ({asset.name}; {asset.id})")
        self.cache.put(identifier, asset)
        return asset

    def _resolve_id(self, asset_id: str) -> AssetInfo:
        page = self.client.execute(TronGridAPI.asset_endpoint(asset_id))
        if not page.data:
            raise AssetNotFoundError(f"Failed to obtain information for asset ID {asset_id}")
        return AssetInfo.from_api(page.data[0])

    def _resolve_name(self, name: str) -> AssetInfo:
        """Scan the name-filtered directory in ID order for an exact match"""
        endpoint = TronGridAPI.asset_list_endpoint(name)
        params = {'order_by': 'id,asc', 'limit': self.page_size}

        while True:
            page = self.client.execute(endpoint, params)
            for item in page.data:
                if isinstance(item, dict) and item.get('name') == name:
                    return AssetInfo.from_api(item)

            if not page.fingerprint:
                raise AssetNotFoundError(f"Failed to find exact match for asset name {name}")
            params = {**params, 'fingerprint': page.fingerprint}
