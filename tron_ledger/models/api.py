"""TronGrid response envelope"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel

class ApiPage(BaseModel):
    """
    One page of a TronGrid v1 query.

    Attributes:
        success: Envelope-level success flag
        data: Result objects; a null element marks a broken page
        meta: Paging metadata, `fingerprint` is the continuation cursor
    """
    success: bool = False
    data: List[Optional[Any]] = []
    meta: Optional[Dict[str, Any]] = None

    @property
    def fingerprint(self) -> Optional[str]:
        return (self.meta or {}).get('fingerprint') or None
