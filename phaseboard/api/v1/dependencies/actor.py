"""Actor context dependency: identity and tier from upstream auth headers."""

from __future__ import annotations

from fastapi import HTTPException, Request

from phaseboard.core.config import get_settings
from phaseboard.domain.enums import MemberTier
from phaseboard.domain.value_objects import ActorContext


async def get_actor(request: Request) -> ActorContext:
    """Build ActorContext from the actor id and tier headers.

    A missing tier header is treated as the least privileged tier (guest).
    """
    settings = get_settings()
    person_id = request.headers.get(settings.actor_id_header)
    if not person_id:
        raise HTTPException(
            status_code=401,
            detail=f"Missing required header: {settings.actor_id_header}",
        )
    raw_tier = request.headers.get(settings.actor_tier_header)
    if not raw_tier:
        return ActorContext(person_id=person_id, tier=MemberTier.GUEST)
    try:
        tier = MemberTier(raw_tier.strip().lower())
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {settings.actor_tier_header}: use one of {MemberTier.values()}",
        ) from None
    return ActorContext(person_id=person_id, tier=tier)
