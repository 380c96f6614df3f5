"""TronGrid API client with bounded retries"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from tron_ledger.errors import RetryExhaustedError
from tron_ledger.models.api import ApiPage

logger = logging.getLogger(__name__)

class QueryStatus(Enum):
    SUCCESS = 'success'
    TRANSIENT = 'transient'

@dataclass
class QueryResult:
    """Outcome of a single request attempt"""
    status: QueryStatus
    page: Optional[ApiPage] = None
    reason: str = ''

    @classmethod
    def ok(cls, page: ApiPage) -> 'QueryResult':
        return cls(QueryStatus.SUCCESS, page=page)

    @classmethod
    def transient(cls, reason: str) -> 'QueryResult':
        return cls(QueryStatus.TRANSIENT, reason=reason)

class TronGridAPI:
    """Executes single TronGrid queries, retrying transient failures.

    Knows nothing about pagination: every call to `execute` is one logical
    request that either succeeds or exhausts the retry budget.
    """

    def __init__(self, base_url: str, api_key: Optional[str] = None,
                 max_attempts: int = 10, timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.max_attempts = max_attempts
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        if api_key:
            self.session.headers.update({'TRON-PRO-API-KEY': api_key})

    @classmethod
    def from_settings(cls, settings) -> 'TronGridAPI':
        return cls(
            settings.TRONGRID_URL,
            api_key=settings.TRONGRID_API_KEY,
            max_attempts=settings.MAX_ATTEMPTS,
            timeout=settings.REQUEST_TIMEOUT
        )

    # -------------------------
    # Endpoints
    # -------------------------
    @staticmethod
    def account_transactions_endpoint(address: str) -> str:
        return f"/v1/accounts/{address}/transactions"

    @staticmethod
    def account_trc20_endpoint(address: str) -> str:
        return f"/v1/accounts/{address}/transactions/trc20"

    @staticmethod
    def asset_endpoint(asset_id: str) -> str:
        return f"/v1/assets/{asset_id}"

    @staticmethod
    def asset_list_endpoint(name: str) -> str:
        return f"/v1/assets/{quote(name, safe='')}/list"

    # -------------------------
    # Requests
    # -------------------------
    def _attempt(self, endpoint: str, params: Dict[str, Any]) -> QueryResult:
        """Issue one request and classify the outcome"""
        try:
            response = self.session.get(
                f"{self.base_url}{endpoint}",
                params=params,
                timeout=self.timeout
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            return QueryResult.transient(f"request error: {e}")

        try:
            page = ApiPage.model_validate(body)
        except ValidationError as e:
            return QueryResult.transient(f"malformed response: {e.error_count()} validation errors")

        if not page.success:
            return QueryResult.transient("unsuccessful response")
        if any(item is None for item in page.data):
            return QueryResult.transient("null element in response data")

        return QueryResult.ok(page)

    def execute(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> ApiPage:
        """
        Run a query, repeating it until it succeeds.

        Returns:
            ApiPage: A successful page whose data has no null elements

        Raises:
            RetryExhaustedError: If every attempt failed
        """
        params = dict(params or {})
        result = None
        for attempt in range(1, self.max_attempts + 1):
            result = self._attempt(endpoint, params)
            if result.status is QueryStatus.SUCCESS:
                return result.page
            logger.warning(f"Attempt {attempt}/{self.max_attempts} for {endpoint} failed: {result.reason}")

        reason = result.reason if result else 'no attempts made'
        logger.error(f"Giving up on {endpoint} with params {params}")
        raise RetryExhaustedError(endpoint, self.max_attempts, reason)
