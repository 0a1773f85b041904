"""
Input checks shared by ledger use cases.
"""

from typing import Any

from satstream.domain.exceptions import ValidationError


def require_positive_sats(amount: Any, field: str = "amount") -> int:
    """
    Validate a sat amount.

    Args:
        amount: Candidate amount
        field: Field name reported in the error

    Returns:
        The amount as int

    Raises:
        ValidationError: If amount is not a positive integer
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(field, "must be a whole number of sats")
    if amount <= 0:
        raise ValidationError(field, "must be greater than 0")
    return amount
