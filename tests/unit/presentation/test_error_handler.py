"""
Unit tests for the domain exception handler.

Usage:
    pytest tests/unit/presentation/test_error_handler.py
"""

import importlib
import json
import warnings

from starlette.requests import Request

from satstream.domain.exceptions import (
    InsufficientFundsError,
    PaymentFailedError,
    SelfTipError,
    ValidationError,
)
from satstream.presentation.api.middleware import error_handler


def _request() -> Request:
    return Request(
        {"type": "http", "method": "POST", "path": "/api/wallet/tip", "headers": []}
    )


class TestSatStreamExceptionHandler:
    """Mapping of domain error codes to HTTP responses."""

    def test_module_loads_without_deprecation_warnings(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            importlib.reload(error_handler)

        assert error_handler.STATUS_CODE_MAP["VALIDATION_ERROR"] == 422

    async def test_validation_errors_are_422(self):
        for exc in (ValidationError("amount", "must be positive"), SelfTipError("u1")):
            response = await error_handler.satstream_exception_handler(
                _request(), exc
            )

            assert response.status_code == 422
            assert json.loads(response.body)["error"] == exc.code

    async def test_insufficient_funds_is_402(self):
        response = await error_handler.satstream_exception_handler(
            _request(), InsufficientFundsError(required=10, available=5)
        )

        assert response.status_code == 402

    async def test_payment_failed_carries_reconciliation_flag(self):
        exc = PaymentFailedError(
            "timed out", transaction_id="tx-1", requires_reconciliation=True
        )

        response = await error_handler.satstream_exception_handler(_request(), exc)

        assert response.status_code == 502
        assert json.loads(response.body) == {
            "error": "PAYMENT_FAILED",
            "message": exc.message,
            "transaction_id": "tx-1",
            "requires_reconciliation": True,
        }
