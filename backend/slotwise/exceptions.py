"""Domain exceptions.

Input validation failures surface as ``pydantic.ValidationError`` raised by
the models themselves; the classes below cover the remaining failure modes.
"""


class SlotwiseError(Exception):
    """Base class for slotwise errors."""


class WeightsConfigError(SlotwiseError):
    """Raised when the scoring weights file is missing or inconsistent."""
