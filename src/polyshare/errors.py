"""Error taxonomy for threshold secret sharing.

Every error derives from SharingError. Each also keeps the builtin base a
caller would naturally catch (ValueError, ZeroDivisionError).
"""


class SharingError(Exception):
    """Base class for all secret-sharing failures."""


class InvalidThreshold(SharingError, ValueError):
    """Threshold k is zero or exceeds the share count n."""


class InvalidIndex(SharingError, ValueError):
    """A share index is zero, negative or not an integer."""


class DuplicateIndex(SharingError, ValueError):
    """Two shares carry the same index."""


class InvalidShareValue(SharingError, ValueError):
    """A share value fails the group's validity test."""


class InvalidSecret(SharingError, ValueError):
    """A secret or decoded element lies outside the valid range."""


class InsufficientShares(SharingError, ValueError):
    """Fewer shares were supplied than the threshold requires."""


class InvalidFieldOperation(SharingError, ZeroDivisionError):
    """Field division by zero (or by a non-unit)."""


class InvalidEncoding(SharingError, ValueError):
    """A byte string has the wrong length for the structure."""


class BackendError(SharingError, ValueError):
    """A concrete algebra backend was configured with bad parameters."""
