class LedgerError(Exception):
    """Base class for errors raised by the bookkeeping core."""


class ValidationError(LedgerError, ValueError):
    """Malformed transaction, inventory or user payload."""


class NotFoundError(LedgerError, LookupError):
    """Referenced user, transaction, item or recommendation is absent."""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            message = "{} not found".format(entity)
        else:
            message = "{} {} not found".format(entity, entity_id)
        super().__init__(message)


class PersistenceError(LedgerError, RuntimeError):
    """The record store was unreachable or rejected a write."""


class RecommendationUnavailable(LedgerError, RuntimeError):
    """The external recommendation generator could not produce drafts."""


__all__ = [
    "LedgerError",
    "NotFoundError",
    "PersistenceError",
    "RecommendationUnavailable",
    "ValidationError",
]
