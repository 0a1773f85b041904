"""
List Pending Withdrawals use case.
"""

from satstream.application.dto.ledger_dto import (
    PendingWithdrawalView,
    UserIdentity,
)
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.value_objects.actor import Actor


class ListPendingWithdrawals:
    """Admin review queue: pending withdrawals with requester contact."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    async def execute(self, actor: Actor) -> list[PendingWithdrawalView]:
        """
        Execute listing, newest first.

        Raises:
            AdminRequiredError: Actor is not an admin
        """
        actor.ensure_admin("list_pending_withdrawals")

        async with self.uow_factory() as uow:
            withdrawals = await uow.transactions.list_pending_withdrawals()
            requesters = await uow.users.get_many(
                {withdrawal.sender_id for withdrawal in withdrawals}
            )

        views = []
        for withdrawal in withdrawals:
            requester = requesters.get(withdrawal.sender_id)
            views.append(
                PendingWithdrawalView(
                    transaction=withdrawal,
                    requester=(
                        UserIdentity.with_contact(requester) if requester else None
                    ),
                )
            )
        return views
