from __future__ import annotations


class DomainError(Exception):
    """Base for errors raised by domain code."""


class ValidationError(DomainError):
    pass


class ConflictError(DomainError):
    pass


class StoreNotReadyError(ConflictError):
    """Mutation attempted before the store finished loading (or after close)."""
