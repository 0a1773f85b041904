"""
Application DTOs.
"""

from satstream.application.dto.ledger_dto import (
    BalanceMismatch,
    LedgerAuditReport,
    PendingWithdrawalView,
    ReconciliationItem,
    TransactionView,
    UserIdentity,
    WalletSummary,
)

__all__ = [
    "BalanceMismatch",
    "LedgerAuditReport",
    "PendingWithdrawalView",
    "ReconciliationItem",
    "TransactionView",
    "UserIdentity",
    "WalletSummary",
]
