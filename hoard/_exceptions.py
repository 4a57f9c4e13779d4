__all__ = ("HoardError", "ImmutableResponseError")


class HoardError(Exception): ...


class ImmutableResponseError(HoardError, AttributeError):
    """Raised when a frozen response or header mapping is mutated."""
