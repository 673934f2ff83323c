"""Interface layer error mapping."""

import logfire
from fastapi import HTTPException, status

from quill.adapter.error import (
    AdapterError,
    StoreRequestError,
    StoreUnavailableError,
)
from quill.domain.error import (
    ConflictError,
    DomainError,
    NotFoundError,
    StructuralError,
    ValidationError,
)


def to_http_exception(error: DomainError | AdapterError) -> HTTPException:
    """Map a domain or store failure to the HTTP error returned to the caller."""
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(error), "errors": error.errors},
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, StructuralError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, StoreUnavailableError):
        logfire.error("Document store unavailable", error=str(error))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Comment store unavailable",
        )
    if isinstance(error, StoreRequestError):
        logfire.error(
            "Document store rejected request",
            status_code=error.status_code,
            error=str(error),
        )
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Comment store rejected the request",
        )
    logfire.error("Unhandled error", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Request failed",
    )
