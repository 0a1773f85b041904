"""
Dependency Injection module for SatStream.

Provides container and dependency functions for FastAPI routes.
"""

from satstream.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    reset_container,
    shutdown_container,
)
from satstream.di.dependencies import (
    get_approve_withdrawal,
    get_audit_balances,
    get_broadcast_hub,
    get_deny_withdrawal,
    get_get_transaction_history,
    get_get_wallet_summary,
    get_list_pending_withdrawals,
    get_list_reconciliation_queue,
    get_react_to_post,
    get_reconcile_withdrawal,
    get_request_withdrawal,
    get_send_tip,
    get_set_user_ban,
)

__all__ = [
    # Container
    "DIContainer",
    "get_container",
    "initialize_container",
    "reset_container",
    "shutdown_container",
    # Dependencies
    "get_broadcast_hub",
    "get_send_tip",
    "get_react_to_post",
    "get_get_transaction_history",
    "get_get_wallet_summary",
    "get_request_withdrawal",
    "get_approve_withdrawal",
    "get_deny_withdrawal",
    "get_reconcile_withdrawal",
    "get_list_pending_withdrawals",
    "get_list_reconciliation_queue",
    "get_set_user_ban",
    "get_audit_balances",
]
