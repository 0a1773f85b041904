"""
DestinationAddress value object - payout target of a withdrawal.
"""

from dataclasses import dataclass

LIGHTNING_INVOICE_PREFIXES = ("lnbc", "lntb")
ONCHAIN_ADDRESS_PREFIXES = ("bc1", "1", "3")


@dataclass(frozen=True)
class DestinationAddress:
    """
    Lightning invoice or on-chain Bitcoin address.

    Business rules:
    - Lightning invoices start with lnbc (mainnet) or lntb (testnet)
    - On-chain addresses start with bc1, 1 or 3
    - Bech32 prefixes are matched case-insensitively
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValueError("Destination must be a string")

    @property
    def normalized(self) -> str:
        return self.value.strip()

    @property
    def is_lightning(self) -> bool:
        """Whether the destination is a BOLT11 invoice."""
        return self.normalized.lower().startswith(LIGHTNING_INVOICE_PREFIXES)

    @property
    def is_onchain(self) -> bool:
        """Whether the destination is an on-chain address."""
        return self.normalized.lower().startswith(ONCHAIN_ADDRESS_PREFIXES)

    def is_valid(self) -> bool:
        """Recognized format with no embedded whitespace."""
        value = self.normalized
        if not value or any(ch.isspace() for ch in value):
            return False
        return self.is_lightning or self.is_onchain

    def __str__(self) -> str:
        return self.normalized
