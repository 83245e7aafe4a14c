from __future__ import annotations


class IrmcModelError(Exception):
    """Base class for errors raised by irmc_models."""


class CapacityTypeMismatchError(IrmcModelError, TypeError):
    """A capacity comparison was asked to compare against a foreign type."""

    def __init__(self, received: object):
        self.received_type = type(received).__name__
        super().__init__(
            f"Semantic equality check error: expected CapacityBytes, got {self.received_type}"
        )


class StateMappingError(IrmcModelError, ValueError):
    """A Redfish payload could not be mapped onto a state model."""
