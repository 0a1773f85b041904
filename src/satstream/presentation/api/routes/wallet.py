"""
Wallet API routes.

Provides endpoints for the acting user's ledger:
- GET /wallet - Balance summary
- GET /wallet/transactions - Transaction history
- POST /wallet/tip - Send a tip
- POST /wallet/withdrawals - Request a payout
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from satstream.application.use_cases import (
    GetTransactionHistory,
    GetWalletSummary,
    RequestWithdrawal,
    SendTip,
)
from satstream.di.dependencies import (
    get_get_transaction_history,
    get_get_wallet_summary,
    get_request_withdrawal,
    get_send_tip,
)
from satstream.domain.value_objects.actor import Actor
from satstream.presentation.api.middleware.auth import get_current_actor
from satstream.presentation.schemas.wallet_schemas import (
    SendTipRequest,
    TransactionHistoryItem,
    TransactionResponse,
    WalletResponse,
    WithdrawalRequest,
)

router = APIRouter(prefix="/wallet", tags=["Wallet"])


@router.get(
    "",
    response_model=WalletResponse,
    summary="Get wallet summary",
)
async def get_wallet(
    actor: Actor = Depends(get_current_actor),
    use_case: GetWalletSummary = Depends(get_get_wallet_summary),
) -> WalletResponse:
    """Balance and pending withdrawals; admins also see the node balance."""
    summary = await use_case.execute(actor)
    return WalletResponse(
        user_id=summary.user_id,
        username=summary.username,
        balance=summary.balance,
        pending_withdrawal_total=summary.pending_withdrawal_total,
        node_balance=summary.node_balance,
    )


@router.get(
    "/transactions",
    response_model=list[TransactionHistoryItem],
    summary="Get transaction history",
)
async def get_transactions(
    limit: int = Query(50, description="Maximum entries (1-200)"),
    user_id: Optional[UUID] = Query(None, description="Other user (admins only)"),
    actor: Actor = Depends(get_current_actor),
    use_case: GetTransactionHistory = Depends(get_get_transaction_history),
) -> list[TransactionHistoryItem]:
    """Sent and received transactions, newest first."""
    views = await use_case.execute(actor, user_id=user_id, limit=limit)
    return [TransactionHistoryItem.from_view(view) for view in views]


@router.post(
    "/tip",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a tip",
)
async def send_tip(
    request: SendTipRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: SendTip = Depends(get_send_tip),
) -> TransactionResponse:
    """
    Move sats to another user instantly.

    Errors:
        402 INSUFFICIENT_FUNDS, 404 RECIPIENT_NOT_FOUND,
        422 SELF_TIP / VALIDATION_ERROR
    """
    transaction = await use_case.execute(
        actor,
        receiver_id=request.receiver_id,
        amount=request.amount,
        message=request.message,
    )
    return TransactionResponse.from_entity(transaction)


@router.post(
    "/withdrawals",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a withdrawal",
)
async def request_withdrawal(
    request: WithdrawalRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: RequestWithdrawal = Depends(get_request_withdrawal),
) -> TransactionResponse:
    """
    Queue a payout for admin review. The balance is not debited until
    the payment is confirmed.
    """
    transaction = await use_case.execute(
        actor,
        destination_address=request.destination_address,
        amount=request.amount,
    )
    return TransactionResponse.from_entity(transaction)
