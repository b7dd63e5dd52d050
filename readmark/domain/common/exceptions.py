"""
Domain layer exceptions.

These represent violations of business rules or domain invariants. The
application layer decides whether to surface or absorb them.
"""


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions inherit from this class so they can be caught
    and handled uniformly.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class EntityNotFoundError(DomainError):
    """Raised when an entity cannot be found."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, {"entity_type": entity_type, "entity_id": entity_id})
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvariantViolationError(DomainError):
    """
    Raised when an aggregate invariant is violated.

    Example: a highlight whose text snapshot exceeds the allowed length.
    """

    def __init__(self, aggregate: str, invariant: str) -> None:
        message = f"Invariant violation in {aggregate}: {invariant}"
        super().__init__(message, {"aggregate": aggregate, "invariant": invariant})
        self.aggregate = aggregate
        self.invariant = invariant
