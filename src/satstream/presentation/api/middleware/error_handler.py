"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from satstream.domain.exceptions import PaymentFailedError, SatStreamException
from satstream.infrastructure.monitoring import get_logger

logger = get_logger(__name__)

# Unprocessable Content
HTTP_422 = 422

STATUS_CODE_MAP = {
    "VALIDATION_ERROR": HTTP_422,
    "SELF_TIP": HTTP_422,
    "INVALID_DESTINATION": HTTP_422,
    "INSUFFICIENT_FUNDS": status.HTTP_402_PAYMENT_REQUIRED,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RECIPIENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TRANSACTION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_ENTITY": status.HTTP_409_CONFLICT,
    "ALREADY_PROCESSED": status.HTTP_409_CONFLICT,
    "PAYMENT_FAILED": status.HTTP_502_BAD_GATEWAY,
    "PAYMENT_EXECUTOR_ERROR": status.HTTP_502_BAD_GATEWAY,
    "PAYMENT_EXECUTOR_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "ADMIN_REQUIRED": status.HTTP_403_FORBIDDEN,
    "USER_BANNED": status.HTTP_403_FORBIDDEN,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "LEDGER_INVARIANT": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def satstream_exception_handler(
    request: Request, exc: SatStreamException
) -> JSONResponse:
    """
    Handle SatStream domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code = STATUS_CODE_MAP.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")

    content = {
        "error": exc.code,
        "message": exc.message,
    }
    if isinstance(exc, PaymentFailedError):
        content["transaction_id"] = exc.transaction_id
        content["requires_reconciliation"] = exc.requires_reconciliation

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(status_code=status_code, content=content, headers=headers)
