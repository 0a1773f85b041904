"""
List Reconciliation Queue use case.
"""

from datetime import datetime, timedelta
from typing import Optional

from satstream.application.dto.ledger_dto import ReconciliationItem, UserIdentity
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.value_objects.actor import Actor


class ListReconciliationQueue:
    """
    Pending withdrawals untouched for longer than the stale threshold.

    Oldest first. Items with a payment in flight need a payment network
    check before they can be reconciled.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory, stale_after_minutes: int = 60):
        self.uow_factory = uow_factory
        self.stale_after = timedelta(minutes=stale_after_minutes)

    async def execute(
        self, actor: Actor, now: Optional[datetime] = None
    ) -> list[ReconciliationItem]:
        actor.ensure_admin("list_reconciliation_queue")
        now = now or datetime.now()
        cutoff = now - self.stale_after

        async with self.uow_factory() as uow:
            stale = await uow.transactions.list_stale_withdrawals(cutoff)
            requesters = await uow.users.get_many(
                {withdrawal.sender_id for withdrawal in stale}
            )

        items = []
        for withdrawal in stale:
            last_touched = withdrawal.processing_started_at or withdrawal.created_at
            requester = requesters.get(withdrawal.sender_id)
            items.append(
                ReconciliationItem(
                    transaction=withdrawal,
                    requester=(
                        UserIdentity.with_contact(requester) if requester else None
                    ),
                    in_flight=withdrawal.is_in_flight,
                    age_minutes=int((now - last_touched).total_seconds() // 60),
                )
            )
        return items
