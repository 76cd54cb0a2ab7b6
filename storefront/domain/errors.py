# storefront/domain/errors.py


class ServiceError(Exception):
    """Base for every error a service hands back to its caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Referenced cart or user does not exist."""


class InvalidRequestError(ServiceError):
    """Business rule violation. The message names the rule."""


class AlreadyExistsError(ServiceError):
    """Creation of something that is already there (cart, email)."""


class InternalError(ServiceError):
    """Storage or commit failure. Safe for the caller to retry after backoff."""
