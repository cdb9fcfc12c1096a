"""Error types raised by the dosing core."""


class ValidationError(ValueError):
    """User input was rejected; the message is safe to show to the user."""


class InvalidInputError(ValidationError):
    """A numeric field or unit could not be interpreted."""


class PersistenceError(RuntimeError):
    """Encoding, decoding or storage of a persisted collection failed."""
