"""Domain errors raised by the catalog and product pipelines."""

from __future__ import annotations


class StorefrontError(RuntimeError):
    """Base class for errors raised by storefront services."""


class ValidationError(StorefrontError):
    """Raised when a required parameter is missing or malformed."""


class NotFoundError(StorefrontError):
    """Raised when a user, mapping or product row does not exist."""


class CollaboratorError(StorefrontError):
    """Raised when the ranking or returns service fails or misbehaves."""

    def __init__(self, service: str, reason: str) -> None:
        super().__init__(f"{service} call failed: {reason}")
        self.service = service
        self.reason = reason


class StoreError(StorefrontError):
    """Raised when a relational store query fails."""
