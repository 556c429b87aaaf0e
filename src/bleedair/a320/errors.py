"""Errors raised by the A320 pneumatic system."""

ENGINE_NUMBERS = (1, 2)


class InvalidEngineNumberError(ValueError):
    """Raised when a per-engine accessor gets an engine number other than 1 or 2."""


def check_engine_number(number: int) -> int:
    """Return number unchanged if it names an engine.

    Raises:
        InvalidEngineNumberError: For anything other than 1 or 2.
    """
    if number not in ENGINE_NUMBERS:
        raise InvalidEngineNumberError(f"Invalid engine number: {number}")
    return number
