"""Recovery engine error types.

Scoring never raises on missing or malformed biometrics; these are reserved
for inputs the engine cannot interpret at all.
"""


class RecoveryEngineError(ValueError):
    """Base class for all recovery engine errors."""


class InvalidDateError(RecoveryEngineError):
    """Raised when a record date cannot be turned into a calendar day.

    Attributes:
        value: The offending date value as received
    """

    def __init__(self, value):
        self.value = value
        super().__init__(f"Cannot interpret {value!r} as a calendar date")


class InvalidWindowError(RecoveryEngineError):
    """Raised when the display window is not one of the supported sizes."""

    def __init__(self, window_days, allowed):
        self.window_days = window_days
        self.allowed = tuple(allowed)
        super().__init__(f"window_days={window_days!r} not in {self.allowed}")


class PayloadError(RecoveryEngineError):
    """Raised when an upstream payload is neither a list nor a $values envelope."""
