"""Error taxonomy for ledger reconstruction"""


class LedgerError(Exception):
    """Base exception for errors that abort a ledger run"""
    pass


class RetryExhaustedError(LedgerError):
    """A request kept failing transiently until the retry budget ran out"""

    def __init__(self, endpoint: str, attempts: int, reason: str):
        self.endpoint = endpoint
        self.attempts = attempts
        self.reason = reason
        super().__init__(f"Request to {endpoint} failed after {attempts} attempts: {reason}")


class StructuralError(LedgerError):
    """Retrieved data violates an invariant the ledger depends on"""
    pass


class PaginationError(StructuralError):
    """Pages could not be stitched together without skipping or duplicating records"""
    pass


class ClassificationError(StructuralError):
    """A transaction has a shape the classifier refuses to guess at"""
    pass


class AssetNotFoundError(StructuralError):
    """An asset identifier could not be resolved to exactly one asset"""
    pass
