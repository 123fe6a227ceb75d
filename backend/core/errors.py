"""
core/errors.py
──────────────
Exception taxonomy for the data synchronization layer.

    DataLayerError
    ├── GatewayError          transport failure or remote rejection
    │   ├── GatewayNotReady   connection to the store not yet established
    │   └── EntityNotFound    point read found no matching record
    ├── FetchFailure          a cached read failed (stored on the entry)
    └── MutationFailure       a write was rejected (never cached, never retried)

Gateways raise ``GatewayError`` subclasses only.  The cache wraps read
errors in ``FetchFailure``; the mutation coordinator wraps write errors in
``MutationFailure``.  Both keep the gateway error as ``__cause__``.
"""

from typing import Any, Optional


class DataLayerError(Exception):
    """Base class for every error raised by the data layer."""


class GatewayError(DataLayerError):
    """The remote store rejected a call or could not be reached."""


class GatewayNotReady(GatewayError):
    """The gateway has no established connection yet."""

    def __init__(self, message: str = "Data gateway is not ready") -> None:
        super().__init__(message)


class EntityNotFound(GatewayError):
    """A point read returned no record for the requested identity."""

    def __init__(self, resource: str, identity: Any) -> None:
        self.resource = resource
        self.identity = identity
        super().__init__(f"{resource} '{identity}' not found")


class FetchFailure(DataLayerError):
    """
    A cache fetch failed.

    Attributes:
        key:    Cache key whose fetch failed.
        detail: Human-readable reason (the gateway error message).
    """

    def __init__(self, key: tuple, detail: str) -> None:
        self.key = key
        self.detail = detail
        super().__init__(f"Fetch for {key!r} failed: {detail}")

    @property
    def not_found(self) -> bool:
        """True when the underlying gateway error was ``EntityNotFound``."""
        return isinstance(self.__cause__, EntityNotFound)


class MutationFailure(DataLayerError):
    """
    A write was rejected by the gateway.

    Attributes:
        operation: Name of the mutation that failed.
        detail:    Human-readable reason.
    """

    def __init__(self, operation: str, detail: Optional[str] = None) -> None:
        self.operation = operation
        self.detail = detail or "write rejected"
        super().__init__(f"{operation} failed: {self.detail}")
