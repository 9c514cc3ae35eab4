class BookingError(Exception):
    """Base class for booking failures surfaced to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """A booking request broke a business rule."""


class NotFoundError(BookingError):
    """A referenced patient or order, or a next appointment, is missing."""
