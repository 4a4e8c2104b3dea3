"""Translation of record store failures into domain errors."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from compliance_api.exceptions import StorageError
from compliance_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Surface record store failures as ``StorageError``.

    Domain errors raised inside the block pass through unchanged. Driver
    errors and timeouts are logged (sanitized) and replaced; the operation is
    never retried here because the write may not be idempotent.

    Args:
        operation: Short operation name used in logs and error details
    """
    try:
        yield
    except SQLAlchemyError as e:
        log_error(logger, f"Record store failure during {operation}", e)
        raise StorageError(operation) from None
    except TimeoutError as e:
        log_error(logger, f"Record store timeout during {operation}", e)
        raise StorageError(operation) from None
