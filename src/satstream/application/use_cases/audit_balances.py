"""
Audit Balances use case.

Recomputes every balance from completed transactions and reports users
whose stored balance disagrees.
"""

from collections import defaultdict
from uuid import UUID

from satstream.application.dto.ledger_dto import BalanceMismatch, LedgerAuditReport
from satstream.domain.entities.transaction import TransactionType
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class AuditBalances:
    """Read-only consistency check over the whole ledger."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    async def execute(self, actor: Actor) -> LedgerAuditReport:
        actor.ensure_admin("audit_balances")

        async with self.uow_factory() as uow:
            users = await uow.users.list_all()
            completed = await uow.transactions.list_completed()

        computed: dict[UUID, int] = defaultdict(int)
        for transaction in completed:
            if transaction.transaction_type == TransactionType.TIP:
                computed[transaction.sender_id] -= transaction.amount
                computed[transaction.receiver_id] += transaction.amount
            elif transaction.transaction_type == TransactionType.REWARD:
                computed[transaction.receiver_id] += transaction.amount
            elif transaction.transaction_type == TransactionType.WITHDRAWAL:
                computed[transaction.sender_id] -= transaction.amount

        mismatches = [
            BalanceMismatch(
                user_id=user.id,
                username=user.username,
                stored_balance=user.balance,
                computed_balance=computed[user.id],
            )
            for user in users
            if user.balance != computed[user.id]
        ]

        report = LedgerAuditReport(
            users_checked=len(users),
            transactions_checked=len(completed),
            total_balance=sum(user.balance for user in users),
            mismatches=mismatches,
        )
        if mismatches:
            logger.error(f"Ledger audit found {len(mismatches)} balance mismatches")
        else:
            logger.info(f"Ledger audit clean: {report.users_checked} users")

        return report
