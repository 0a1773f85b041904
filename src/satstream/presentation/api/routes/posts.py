"""
Post reaction API routes.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from satstream.application.use_cases import ReactToPost
from satstream.di.dependencies import get_react_to_post
from satstream.domain.value_objects.actor import Actor
from satstream.presentation.api.middleware.auth import get_current_actor
from satstream.presentation.schemas.wallet_schemas import (
    ReactionResponse,
    ReactRequest,
)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post(
    "/{post_id}/react",
    response_model=ReactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Like or tip a post",
)
async def react_to_post(
    post_id: UUID,
    request: ReactRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: ReactToPost = Depends(get_react_to_post),
) -> ReactionResponse:
    reaction = await use_case.execute(
        actor,
        post_id=post_id,
        reaction_type=request.reaction_type,
        amount=request.amount,
    )
    return ReactionResponse.from_entity(reaction)
