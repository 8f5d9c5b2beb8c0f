# fincore/exceptions.py

class DomainError(Exception):
    """Base class for finance domain errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised by services when a request fails validation (e.g. a rejected contribution)."""


class NotFoundError(DomainError):
    """Raised when a savings goal or other entity does not exist."""
