"""
Domain exceptions
"""


class PartyValidationError(ValueError):
    """A submission or setup change was rejected; nothing was written"""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field
