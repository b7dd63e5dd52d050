"""Shared domain building blocks."""

from .domain_event import DomainEvent
from .entity import Entity, EntityId
from .exceptions import DomainError, EntityNotFoundError, InvariantViolationError
from .value_object import ValueObject

__all__ = [
    "DomainError",
    "DomainEvent",
    "Entity",
    "EntityId",
    "EntityNotFoundError",
    "InvariantViolationError",
    "ValueObject",
]
