"""
Domain value objects.
"""

from satstream.domain.value_objects.actor import Actor
from satstream.domain.value_objects.destination_address import (
    LIGHTNING_INVOICE_PREFIXES,
    ONCHAIN_ADDRESS_PREFIXES,
    DestinationAddress,
)

__all__ = [
    "Actor",
    "DestinationAddress",
    "LIGHTNING_INVOICE_PREFIXES",
    "ONCHAIN_ADDRESS_PREFIXES",
]
