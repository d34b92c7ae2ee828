"""Domain-level exceptions.

Every rule violation raised by the model derives from DomainException, so
the CLI can turn any of them into a readable error with a single except.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class FieldError:
    """A single failed check, pinned to the input field it concerns."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``errors`` holds the individual field failures when the problem can be
    pinned to specific inputs (e.g. a blank customer name).
    """

    def __init__(self, message: str, errors: Iterable[FieldError] = ()) -> None:
        super().__init__(message)
        self.errors: tuple[FieldError, ...] = tuple(errors)

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]


class InvalidQuantityError(ValidationError):
    """A line quantity fell outside the allowed range."""

    def __init__(self, message: str) -> None:
        super().__init__(message, [FieldError("quantity", message)])


class ModificationNotAllowedError(DomainException):
    """The aggregate is in a state that forbids adding or removing items."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ItemNotFoundError(EntityNotFoundError):
    """A line item id does not belong to the aggregate."""
