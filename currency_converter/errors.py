"""Conversion errors.

Every failure surfaces to the caller; none of them carries a usable amount.
Transports translate these into their own status codes at the edge.
"""

from typing import Iterable, Optional


class ConversionError(Exception):
    """Base class for conversion failures."""


class RateNotFound(ConversionError):
    """One or more currency codes are absent from the rate table."""

    def __init__(self, codes: Iterable[str]):
        self.codes = tuple(codes)
        super().__init__(f"conversion rate not found for {', '.join(self.codes)}")


class BackingStoreUnavailable(ConversionError):
    """The rate store itself failed (connection or I/O error)."""


class DeadlineExceeded(ConversionError):
    """The caller's deadline elapsed before the conversion completed."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        if timeout is None:
            message = "deadline exceeded"
        else:
            message = f"deadline of {timeout:.3f}s exceeded"
        super().__init__(message)
