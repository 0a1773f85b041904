"""
API middleware.
"""

from satstream.presentation.api.middleware.auth import (
    get_current_actor,
    get_current_user,
    get_current_user_id,
)
from satstream.presentation.api.middleware.error_handler import (
    satstream_exception_handler,
)
from satstream.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from satstream.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)

__all__ = [
    "get_current_actor",
    "get_current_user",
    "get_current_user_id",
    "satstream_exception_handler",
    "MetricsMiddleware",
    "RequestIDMiddleware",
]
