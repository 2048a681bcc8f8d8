"""Exception hierarchy for PracTempo.

Lookups never raise; these exceptions cover structural parse failures,
schema authoring mistakes and schedule build failures.
"""

from __future__ import annotations


class PracTempoError(Exception):
    """Base class for all PracTempo errors."""

    pass


class ScheduleFormatError(PracTempoError, ValueError):
    """Raised when a schedule document is structurally invalid.

    Structural failures are fatal for the whole parse: no partial result is
    returned to the caller.
    """

    pass


class SchemaDefinitionError(PracTempoError, ValueError):
    """Raised when a configuration schema is ambiguous or malformed."""

    pass


class RegistryFrozenError(PracTempoError, RuntimeError):
    """Raised when registering into a registry that has been frozen."""

    pass


class FeatureConfigError(PracTempoError, ValueError):
    """Raised by feature factories when positional args are invalid."""

    pass


class ScheduleBuildError(PracTempoError):
    """Raised when a schedule cannot be built.

    Attributes:
        index: 1-based position of the offending row in the document.
        label: Human readable label of the offending interval.
        reason: Description of what went wrong.
    """

    def __init__(self, index: int, label: str, reason: str) -> None:
        self.index = index
        self.label = label
        self.reason = reason
        super().__init__(f"Error processing interval {index} ({label}): {reason}")
