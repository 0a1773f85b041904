"""
Get Wallet Summary use case.
"""

from typing import Optional

from satstream.application.dto.ledger_dto import WalletSummary
from satstream.domain.exceptions import EntityNotFoundError, PaymentExecutorError
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.services.i_payment_executor import IPaymentExecutor
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class GetWalletSummary:
    """
    Current balance plus sats reserved by pending withdrawals.

    Admins additionally see the node-custodied balance so they can
    compare it with the sum of internal balances.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        payment_executor: Optional[IPaymentExecutor] = None,
    ):
        self.uow_factory = uow_factory
        self.payment_executor = payment_executor

    async def execute(self, actor: Actor) -> WalletSummary:
        actor.ensure_active()

        async with self.uow_factory() as uow:
            user = await uow.users.get_by_id(actor.id)
            if user is None:
                raise EntityNotFoundError("User", str(actor.id))
            pending_total = await uow.transactions.sum_pending_withdrawals(user.id)

        summary = WalletSummary(
            user_id=user.id,
            username=user.username,
            balance=user.balance,
            pending_withdrawal_total=pending_total,
        )

        if actor.is_admin and self.payment_executor is not None:
            try:
                summary.node_balance = await self.payment_executor.get_balance()
            except PaymentExecutorError as e:
                logger.warning(f"Node balance unavailable: {e.message}")

        return summary
