"""
Unit tests for User, Post and Reaction entities and the Actor value object.

Usage:
    pytest tests/unit/domain/test_user_and_reactions.py
"""

from uuid import uuid4

import pytest

from satstream.domain.entities.post import Post
from satstream.domain.entities.reaction import Reaction, ReactionType
from satstream.domain.entities.user import User
from satstream.domain.exceptions import AdminRequiredError, UserBannedError
from satstream.domain.value_objects.actor import Actor


class TestUser:
    def test_defaults_to_empty_balance(self):
        user = User(username="alice", email="alice@example.com")

        assert user.balance == 0
        assert not user.is_admin
        assert not user.is_banned

    def test_negative_balance_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            User(username="alice", email="alice@example.com", balance=-1)

    def test_invalid_email_rejected(self):
        with pytest.raises(ValueError, match="email"):
            User(username="alice", email="not-an-email")

    def test_public_projection_hides_balance(self):
        user = User(username="alice", email="alice@example.com", balance=10)

        assert "balance" not in user.to_public()
        assert user.to_public()["username"] == "alice"


class TestPostAndReaction:
    def test_empty_post_rejected(self):
        with pytest.raises(ValueError):
            Post(user_id=uuid4(), content="   ")

    def test_like_without_amount(self):
        reaction = Reaction(post_id=uuid4(), user_id=uuid4())

        assert reaction.reaction_type == ReactionType.LIKE
        assert reaction.amount is None

    def test_like_with_amount_rejected(self):
        with pytest.raises(ValueError):
            Reaction(reaction_type=ReactionType.LIKE, amount=10)

    def test_tip_requires_transaction(self):
        with pytest.raises(ValueError):
            Reaction(reaction_type=ReactionType.TIP, amount=10)

    def test_tip_requires_positive_amount(self):
        with pytest.raises(ValueError):
            Reaction(
                reaction_type=ReactionType.TIP, amount=0, transaction_id=uuid4()
            )


class TestActor:
    def test_from_user_copies_flags(self):
        user = User(
            username="root", email="root@example.com", is_admin=True, balance=5
        )
        actor = Actor.from_user(user)

        assert actor.id == user.id
        assert actor.is_admin
        assert actor.balance == 5

    def test_banned_actor_cannot_act(self):
        with pytest.raises(UserBannedError):
            Actor(id=uuid4(), is_banned=True).ensure_active()

    def test_non_admin_rejected(self):
        with pytest.raises(AdminRequiredError):
            Actor(id=uuid4()).ensure_admin("approve_withdrawal")

    def test_banned_admin_rejected(self):
        with pytest.raises(UserBannedError):
            Actor(id=uuid4(), is_admin=True, is_banned=True).ensure_admin("audit")
