"""Domain-specific exceptions for Haemo Scoring.

Scoring never raises for malformed answers; these exceptions signal caller
contract violations only:

    DomainError (base)
    ├── InstrumentError
    │   ├── UnknownInstrumentError
    │   └── InstrumentMismatchError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from haemo_scoring.domain.enums import InstrumentType


class DomainError(Exception):
    """Base class for domain errors.

    All domain-specific exceptions inherit from this class so callers can
    catch every domain error with a single except clause.
    """


class InstrumentError(DomainError):
    """Errors related to the questionnaire instrument selection."""


class UnknownInstrumentError(InstrumentError):
    """Raised when an instrument type is not one of the supported values."""

    def __init__(self, value: object) -> None:
        """Initialize with the rejected value.

        Args:
            value: The instrument identifier that was not recognised.
        """
        self.value = value
        super().__init__(f"Unknown instrument type: {value!r}")


class InstrumentMismatchError(InstrumentError):
    """Raised when an answer set is scored as the wrong instrument."""

    def __init__(self, expected: InstrumentType, actual: InstrumentType) -> None:
        """Initialize with both instrument types.

        Args:
            expected: Instrument requested by the caller.
            actual: Instrument the answer set was parsed for.
        """
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Answer set was parsed for {actual.value!r}, cannot score as {expected.value!r}"
        )
