"""Translation of use case failures into HTTP errors."""

import logging
from typing import TypeVar

from fastapi import HTTPException, status

from flashinbox.application.common.result import Failure, Result
from flashinbox.domain.common.exceptions import DomainError, ErrorKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_422_UNPROCESSABLE_CONTENT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.EXTERNAL_SYSTEM: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.IO: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap_or_raise(result: Result[T, DomainError]) -> T:
    """
    Return the success value or raise the HTTPException matching the error kind.

    Raises:
        HTTPException: 404, 422, 502 or 500 depending on the failure
    """
    if isinstance(result, Failure):
        error = result.unwrap_error()
        status_code = STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"Request failed with {error.kind.value} error: {error!s}")
        raise HTTPException(status_code=status_code, detail=error.message)
    return result.unwrap()
