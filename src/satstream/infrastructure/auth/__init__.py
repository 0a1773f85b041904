"""
Authentication infrastructure package.
"""

from satstream.infrastructure.auth.jwt_handler import (
    create_access_token,
    decode_access_token,
    extract_user_id,
)

__all__ = [
    "create_access_token",
    "decode_access_token",
    "extract_user_id",
]
