from typing import Optional


class BookingValidationError(Exception):
    """A booking request that breaks a business rule.

    ``field`` names the request field the UI should attach the message to.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
