"""
Get Transaction History use case.
"""

from typing import Optional
from uuid import UUID

from satstream.application.dto.ledger_dto import TransactionView, UserIdentity
from satstream.domain.exceptions import ValidationError
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.value_objects.actor import Actor

MAX_HISTORY_LIMIT = 200


class GetTransactionHistory:
    """
    List a user's transactions, newest first.

    Sender and receiver identities are resolved with two explicit user
    lookups. Rewards have no sender and withdrawals no receiver; those
    sides stay None.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    async def execute(
        self,
        actor: Actor,
        user_id: Optional[UUID] = None,
        limit: int = 50,
    ) -> list[TransactionView]:
        """
        Execute history lookup.

        Args:
            actor: Authenticated caller
            user_id: Whose history (default: the actor's own; others
                require admin)
            limit: Maximum entries (1-200)

        Raises:
            ValidationError: If limit is out of range
            AdminRequiredError: Viewing another user as non-admin
        """
        actor.ensure_active()
        target_id = user_id or actor.id
        if target_id != actor.id:
            actor.ensure_admin("view_transaction_history")
        if not 1 <= limit <= MAX_HISTORY_LIMIT:
            raise ValidationError("limit", f"must be between 1 and {MAX_HISTORY_LIMIT}")

        async with self.uow_factory() as uow:
            transactions = await uow.transactions.list_for_user(target_id, limit=limit)
            senders = await uow.users.get_many(
                {t.sender_id for t in transactions if t.sender_id}
            )
            receivers = await uow.users.get_many(
                {t.receiver_id for t in transactions if t.receiver_id}
            )

        views = []
        for transaction in transactions:
            sender = senders.get(transaction.sender_id)
            receiver = receivers.get(transaction.receiver_id)
            views.append(
                TransactionView(
                    transaction=transaction,
                    sender=UserIdentity.public(sender) if sender else None,
                    receiver=UserIdentity.public(receiver) if receiver else None,
                )
            )
        return views
