"""
Application use cases.
"""

from satstream.application.use_cases.approve_withdrawal import ApproveWithdrawal
from satstream.application.use_cases.audit_balances import AuditBalances
from satstream.application.use_cases.create_post import CreatePost
from satstream.application.use_cases.create_user import CreateUser
from satstream.application.use_cases.deny_withdrawal import DenyWithdrawal
from satstream.application.use_cases.get_transaction_history import (
    GetTransactionHistory,
)
from satstream.application.use_cases.get_wallet_summary import GetWalletSummary
from satstream.application.use_cases.grant_reward import GrantReward
from satstream.application.use_cases.list_pending_withdrawals import (
    ListPendingWithdrawals,
)
from satstream.application.use_cases.list_reconciliation_queue import (
    ListReconciliationQueue,
)
from satstream.application.use_cases.react_to_post import ReactToPost
from satstream.application.use_cases.reconcile_withdrawal import (
    ReconcileOutcome,
    ReconcileWithdrawal,
)
from satstream.application.use_cases.request_withdrawal import RequestWithdrawal
from satstream.application.use_cases.send_tip import SendTip, transfer_tip
from satstream.application.use_cases.set_user_ban import SetUserBan

__all__ = [
    "ApproveWithdrawal",
    "AuditBalances",
    "CreatePost",
    "CreateUser",
    "DenyWithdrawal",
    "GetTransactionHistory",
    "GetWalletSummary",
    "GrantReward",
    "ListPendingWithdrawals",
    "ListReconciliationQueue",
    "ReactToPost",
    "ReconcileOutcome",
    "ReconcileWithdrawal",
    "RequestWithdrawal",
    "SendTip",
    "SetUserBan",
    "transfer_tip",
]
