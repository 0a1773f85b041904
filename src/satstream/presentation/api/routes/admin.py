"""
Admin review API routes.

Every endpoint requires an admin actor; the use cases enforce it.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from satstream.application.use_cases import (
    ApproveWithdrawal,
    AuditBalances,
    DenyWithdrawal,
    ListPendingWithdrawals,
    ListReconciliationQueue,
    ReconcileWithdrawal,
    SetUserBan,
)
from satstream.di.dependencies import (
    get_approve_withdrawal,
    get_audit_balances,
    get_deny_withdrawal,
    get_list_pending_withdrawals,
    get_list_reconciliation_queue,
    get_reconcile_withdrawal,
    get_set_user_ban,
)
from satstream.domain.value_objects.actor import Actor
from satstream.presentation.api.middleware.auth import get_current_actor
from satstream.presentation.schemas.admin_schemas import (
    BanRequest,
    LedgerAuditResponse,
    PendingWithdrawalResponse,
    ReconcileRequest,
    ReconciliationItemResponse,
    UserStatusResponse,
)
from satstream.presentation.schemas.wallet_schemas import TransactionResponse

router = APIRouter(prefix="/admin", tags=["Admin"])


# ================================================================
# Withdrawal review
# ================================================================


@router.get(
    "/withdrawals",
    response_model=list[PendingWithdrawalResponse],
    summary="List pending withdrawals",
)
async def list_pending_withdrawals(
    actor: Actor = Depends(get_current_actor),
    use_case: ListPendingWithdrawals = Depends(get_list_pending_withdrawals),
) -> list[PendingWithdrawalResponse]:
    views = await use_case.execute(actor)
    return [PendingWithdrawalResponse.from_view(view) for view in views]


@router.get(
    "/withdrawals/reconciliation",
    response_model=list[ReconciliationItemResponse],
    summary="List withdrawals needing reconciliation",
)
async def list_reconciliation_queue(
    actor: Actor = Depends(get_current_actor),
    use_case: ListReconciliationQueue = Depends(get_list_reconciliation_queue),
) -> list[ReconciliationItemResponse]:
    items = await use_case.execute(actor)
    return [ReconciliationItemResponse.from_item(item) for item in items]


@router.post(
    "/withdrawals/{transaction_id}/approve",
    response_model=TransactionResponse,
    summary="Approve and pay a withdrawal",
)
async def approve_withdrawal(
    transaction_id: UUID,
    actor: Actor = Depends(get_current_actor),
    use_case: ApproveWithdrawal = Depends(get_approve_withdrawal),
) -> TransactionResponse:
    """
    Pay the withdrawal and debit the requester.

    Errors:
        402 INSUFFICIENT_FUNDS (withdrawal denied),
        409 ALREADY_PROCESSED,
        502 PAYMENT_FAILED (check requires_reconciliation)
    """
    transaction = await use_case.execute(actor, transaction_id)
    return TransactionResponse.from_entity(transaction)


@router.post(
    "/withdrawals/{transaction_id}/deny",
    response_model=TransactionResponse,
    summary="Deny a withdrawal",
)
async def deny_withdrawal(
    transaction_id: UUID,
    actor: Actor = Depends(get_current_actor),
    use_case: DenyWithdrawal = Depends(get_deny_withdrawal),
) -> TransactionResponse:
    transaction = await use_case.execute(actor, transaction_id)
    return TransactionResponse.from_entity(transaction)


@router.post(
    "/withdrawals/{transaction_id}/reconcile",
    response_model=TransactionResponse,
    summary="Resolve an in-flight withdrawal by hand",
)
async def reconcile_withdrawal(
    transaction_id: UUID,
    request: ReconcileRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: ReconcileWithdrawal = Depends(get_reconcile_withdrawal),
) -> TransactionResponse:
    transaction = await use_case.execute(
        actor,
        transaction_id,
        outcome=request.outcome,
        external_transaction_id=request.external_transaction_id,
    )
    return TransactionResponse.from_entity(transaction)


# ================================================================
# Moderation and audit
# ================================================================


@router.post(
    "/users/{user_id}/ban",
    response_model=UserStatusResponse,
    summary="Ban or unban a user",
)
async def set_user_ban(
    user_id: UUID,
    request: BanRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: SetUserBan = Depends(get_set_user_ban),
) -> UserStatusResponse:
    user = await use_case.execute(actor, user_id, banned=request.banned)
    return UserStatusResponse(
        id=user.id, username=user.username, is_banned=user.is_banned
    )


@router.get(
    "/ledger/audit",
    response_model=LedgerAuditResponse,
    summary="Recompute balances from the transaction log",
)
async def audit_ledger(
    actor: Actor = Depends(get_current_actor),
    use_case: AuditBalances = Depends(get_audit_balances),
) -> LedgerAuditResponse:
    report = await use_case.execute(actor)
    return LedgerAuditResponse.from_report(report)
