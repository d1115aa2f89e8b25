"""
Custom exceptions for the wikigraph package.
"""

from typing import Sequence

from wikigraph.models import WikiError


class WikigraphException(Exception):
    """Base exception for the package."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class WikiServiceUnavailableException(WikigraphException):
    """Raised when the Wikipedia API is unreachable or returns an error."""
    pass


class DomainErrorException(WikigraphException):
    """Raised when a computation that ended in domain errors is unwrapped."""
    def __init__(self, errors: Sequence[WikiError]):
        self.errors = tuple(errors)
        super().__init__("; ".join(error.message for error in self.errors) or "Domain error")


class SystemFailureException(WikigraphException):
    """Raised when a computation that ended in a system failure is unwrapped."""
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"System failure: {cause}")
