"""
Unit tests for SendTip and ReactToPost use cases.

Validation ordering and publish behaviour with mocked persistence.

Usage:
    pytest tests/unit/application/test_send_tip.py
"""

from uuid import uuid4

import pytest

from satstream.application.use_cases import ReactToPost, SendTip
from satstream.domain.entities.post import Post
from satstream.domain.entities.transaction import Transaction
from satstream.domain.entities.user import User
from satstream.domain.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    RecipientNotFoundError,
    SelfTipError,
    UserBannedError,
    ValidationError,
)
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.persistence import UserLockRegistry
from tests.helpers import MockUnitOfWork, RecordingPublisher


@pytest.fixture
def uow():
    return MockUnitOfWork()


@pytest.fixture
def alice():
    return User(username="alice", email="alice@example.com", balance=1000)


@pytest.fixture
def bob():
    return User(username="bob", email="bob@example.com")


def _users_by_id(*users):
    by_id = {user.id: user for user in users}
    return lambda user_id: by_id.get(user_id)


class TestSendTip:
    """Unit tests for SendTip use case."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _use_case(self, uow, publisher=None):
        return SendTip(
            uow.factory, UserLockRegistry(), publisher or RecordingPublisher()
        )

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_tip_moves_sats_and_publishes(self, uow, alice, bob):
        publisher = RecordingPublisher()
        uow.users.get_by_id.side_effect = _users_by_id(alice, bob)
        uow.ledger.record_transaction.side_effect = lambda tx: tx

        result = await self._use_case(uow, publisher).execute(
            Actor.from_user(alice), bob.id, 300, message="great stream"
        )

        uow.ledger.debit.assert_awaited_once_with(alice.id, 300)
        uow.ledger.credit.assert_awaited_once_with(bob.id, 300)
        assert result.sender_id == alice.id
        assert result.receiver_id == bob.id
        assert result.message == "great stream"
        assert uow.commits == 1
        assert publisher.events == [
            {
                "amount": 300,
                "from_username": "alice",
                "to_username": "bob",
                "post_id": None,
            }
        ]

    async def test_self_tip_rejected_before_any_work(self, uow, alice):
        with pytest.raises(SelfTipError):
            await self._use_case(uow).execute(Actor.from_user(alice), alice.id, 10)

        uow.users.get_by_id.assert_not_awaited()
        uow.ledger.debit.assert_not_awaited()

    @pytest.mark.parametrize("amount", [0, -5, 2.5, True])
    async def test_invalid_amount_rejected(self, uow, alice, bob, amount):
        with pytest.raises(ValidationError):
            await self._use_case(uow).execute(Actor.from_user(alice), bob.id, amount)

        uow.ledger.debit.assert_not_awaited()

    async def test_banned_sender_rejected(self, uow, bob):
        actor = Actor(id=uuid4(), is_banned=True, balance=1000)

        with pytest.raises(UserBannedError):
            await self._use_case(uow).execute(actor, bob.id, 10)

    async def test_unknown_recipient(self, uow, alice):
        uow.users.get_by_id.side_effect = _users_by_id(alice)

        with pytest.raises(RecipientNotFoundError):
            await self._use_case(uow).execute(Actor.from_user(alice), uuid4(), 10)

        uow.ledger.debit.assert_not_awaited()
        assert uow.rollbacks == 1

    async def test_insufficient_funds_not_published(self, uow, alice, bob):
        publisher = RecordingPublisher()
        uow.users.get_by_id.side_effect = _users_by_id(alice, bob)
        uow.ledger.debit.side_effect = InsufficientFundsError(
            required=5000, available=1000
        )

        with pytest.raises(InsufficientFundsError):
            await self._use_case(uow, publisher).execute(
                Actor.from_user(alice), bob.id, 5000
            )

        uow.ledger.credit.assert_not_awaited()
        assert uow.rollbacks == 1
        assert publisher.events == []


class TestReactToPost:
    """Unit tests for ReactToPost use case."""

    def _use_case(self, uow, publisher=None):
        return ReactToPost(
            uow.factory, UserLockRegistry(), publisher or RecordingPublisher()
        )

    async def test_like_creates_reaction_without_ledger(self, uow, alice, bob):
        post = Post(user_id=bob.id, content="hello")
        uow.posts.get_by_id.return_value = post
        uow.reactions.create.side_effect = lambda reaction: reaction

        reaction = await self._use_case(uow).execute(
            Actor.from_user(alice), post.id, "like"
        )

        assert reaction.amount is None
        uow.ledger.debit.assert_not_awaited()
        uow.ledger.record_transaction.assert_not_awaited()

    async def test_like_with_amount_rejected(self, uow, alice):
        with pytest.raises(ValidationError):
            await self._use_case(uow).execute(
                Actor.from_user(alice), uuid4(), "like", amount=10
            )

    async def test_unknown_reaction_type(self, uow, alice):
        with pytest.raises(ValidationError):
            await self._use_case(uow).execute(Actor.from_user(alice), uuid4(), "boost")

    async def test_tip_on_missing_post(self, uow, alice):
        uow.posts.get_by_id.return_value = None

        with pytest.raises(EntityNotFoundError):
            await self._use_case(uow).execute(
                Actor.from_user(alice), uuid4(), "tip", amount=10
            )

    async def test_author_cannot_tip_own_post(self, uow, alice):
        uow.posts.get_by_id.return_value = Post(user_id=alice.id, content="mine")

        with pytest.raises(SelfTipError):
            await self._use_case(uow).execute(
                Actor.from_user(alice), uuid4(), "tip", amount=10
            )

        uow.ledger.debit.assert_not_awaited()

    async def test_tip_reaction_links_transaction(self, uow, alice, bob):
        publisher = RecordingPublisher()
        post = Post(user_id=bob.id, content="hello")
        uow.posts.get_by_id.return_value = post
        uow.users.get_by_id.side_effect = _users_by_id(alice, bob)
        uow.ledger.record_transaction.side_effect = lambda tx: tx
        uow.reactions.create.side_effect = lambda reaction: reaction

        reaction = await self._use_case(uow, publisher).execute(
            Actor.from_user(alice), post.id, "tip", amount=42
        )

        recorded: Transaction = uow.ledger.record_transaction.await_args.args[0]
        assert reaction.transaction_id == recorded.id
        assert reaction.amount == 42
        assert recorded.receiver_id == bob.id
        assert publisher.events[0]["post_id"] == post.id
