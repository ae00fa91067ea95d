"""
Error taxonomy shared by the core and the HTTP layer.

- ValidationError: the caller sent something unusable (HTTP 400)
- StoreError: the persistent store failed (HTTP 500)

An unknown identifier is not an error: resolve() returns None.
"""


class SurlError(Exception):
    """Base class for all SURL errors"""


class ValidationError(SurlError):
    """Submitted URL is missing or empty"""


class StoreError(SurlError):
    """Reading from or writing to the persistent store failed"""
