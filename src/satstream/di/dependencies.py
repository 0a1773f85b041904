"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
Use cases open their own units of work, so no request-scoped session
is handed out here.
"""

from satstream.application.use_cases import (
    ApproveWithdrawal,
    AuditBalances,
    DenyWithdrawal,
    GetTransactionHistory,
    GetWalletSummary,
    ListPendingWithdrawals,
    ListReconciliationQueue,
    ReactToPost,
    ReconcileWithdrawal,
    RequestWithdrawal,
    SendTip,
    SetUserBan,
)
from satstream.di.container import get_container
from satstream.infrastructure.relay import BroadcastHub

# ================================================================
# Service Dependencies
# ================================================================


def get_broadcast_hub() -> BroadcastHub:
    """Get relay broadcast hub dependency."""
    return get_container().broadcast_hub


# ================================================================
# Tip Engine
# ================================================================


def get_send_tip() -> SendTip:
    """Get SendTip use case dependency."""
    return get_container().get_send_tip()


def get_react_to_post() -> ReactToPost:
    """Get ReactToPost use case dependency."""
    return get_container().get_react_to_post()


def get_get_transaction_history() -> GetTransactionHistory:
    """Get GetTransactionHistory use case dependency."""
    return get_container().get_transaction_history()


def get_get_wallet_summary() -> GetWalletSummary:
    """Get GetWalletSummary use case dependency."""
    return get_container().get_wallet_summary()


# ================================================================
# Withdrawal Workflow
# ================================================================


def get_request_withdrawal() -> RequestWithdrawal:
    """Get RequestWithdrawal use case dependency."""
    return get_container().get_request_withdrawal()


def get_approve_withdrawal() -> ApproveWithdrawal:
    """Get ApproveWithdrawal use case dependency."""
    return get_container().get_approve_withdrawal()


def get_deny_withdrawal() -> DenyWithdrawal:
    """Get DenyWithdrawal use case dependency."""
    return get_container().get_deny_withdrawal()


def get_reconcile_withdrawal() -> ReconcileWithdrawal:
    """Get ReconcileWithdrawal use case dependency."""
    return get_container().get_reconcile_withdrawal()


# ================================================================
# Admin Review Surface
# ================================================================


def get_list_pending_withdrawals() -> ListPendingWithdrawals:
    """Get ListPendingWithdrawals use case dependency."""
    return get_container().get_list_pending_withdrawals()


def get_list_reconciliation_queue() -> ListReconciliationQueue:
    """Get ListReconciliationQueue use case dependency."""
    return get_container().get_list_reconciliation_queue()


def get_set_user_ban() -> SetUserBan:
    """Get SetUserBan use case dependency."""
    return get_container().get_set_user_ban()


def get_audit_balances() -> AuditBalances:
    """Get AuditBalances use case dependency."""
    return get_container().get_audit_balances()
