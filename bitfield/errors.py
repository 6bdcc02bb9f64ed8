"""Exceptions raised by bit field accessors."""


class BitFieldError(Exception):
    """Base class for bit field errors."""


class OutOfRangeError(BitFieldError, IndexError):
    """A bit index, bit span or byte count falls outside the backed storage."""


class InvalidWidthError(BitFieldError, ValueError):
    """A field width outside 1-32 was requested."""

    def __init__(self, width: int) -> None:
        self.width = width
        super().__init__(f"Field width must be 1-32, got {width}")
