"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested asset does not exist."""


class InvalidStateError(DomainError):
    """Operation is not permitted in the asset's current lifecycle state."""


class StorageError(RuntimeError):
    """The backing store rejected or could not execute an operation."""


class ReferencedEntityMissingError(StorageError):
    """A row referenced an asset that does not exist."""


def asset_not_found(asset_id: int) -> str:
    """Return message for missing asset."""
    return f"Asset {asset_id} not found"


def asset_removed(asset_id: int) -> str:
    """Return message when a removed asset is mutated."""
    return f"Cannot update removed asset {asset_id}; restore it first"


def history_asset_missing(asset_id: int) -> str:
    """Return message for a history append against a missing asset."""
    return f"Cannot record value history: asset {asset_id} does not exist"


def amount_too_precise(amount, max_places: int) -> str:
    """Return message for an amount with more decimal places than can be stored."""
    return f"Amount {amount} has more than {max_places} decimal places"


def invalid_amount(amount) -> str:
    """Return message for an amount that is not a finite number."""
    return f"Invalid amount: {amount}"


def backfill_not_older(recorded_date: date, newest_date: date) -> str:
    """Return message when a backfilled value is not older than the newest entry."""
    return (
        f"Backfilled value date {recorded_date.isoformat()} must be earlier than "
        f"the most recent recorded value ({newest_date.isoformat()})"
    )


def removal_before_update(removal_date: date, last_updated: date) -> str:
    """Return message when a removal date precedes the last value update."""
    return (
        f"Removal date {removal_date.isoformat()} is earlier than the last "
        f"update ({last_updated.isoformat()})"
    )
