# storefront/utils/storage.py
from functools import wraps

from pydantic import ValidationError
from requests import RequestException
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.errors import InternalError
from storefront.repos.cart_repo import ConcurrentModificationError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# ValidationError: odpowiedz katalogu niezgodna z ProductRead
STORAGE_FAILURES = (SQLAlchemyError, ConcurrentModificationError, RequestException, ValidationError)


def classify_storage_errors(message: str):
    """
    Unit of work boundary for service methods.

    Any exception rolls back the session, so nothing half-written survives the call.
    Raw storage and catalog failures (including malformed catalog payloads) come out as InternalError(message),
    service errors pass through unchanged.
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(self, *args, **kwargs):
            try:
                return fn(self, *args, **kwargs)
            except STORAGE_FAILURES as e:
                self.db.rollback()
                logger.error(f"{fn.__qualname__} failed: {e!r}")
                raise InternalError(message) from e
            except Exception:
                self.db.rollback()
                raise

        return wrapper

    return decorator
