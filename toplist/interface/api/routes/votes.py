"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Request, status

from toplist.application.usecase.vote import (
    CanVoteRequest,
    CanVoteResponse,
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    CheckVoteEligibilityUseCase,
    GetVoteCountUseCase,
    GetVoteStatsUseCase,
    VoteCountRequest,
    VoteCountResponse,
    VoteStatsRequest,
    VoteStatsResponse,
)
from toplist.config import AuthSettings, NetworkSettings
from toplist.domain.error import ServerNotFoundError, VoteCooldownActiveError
from toplist.domain.model.eligibility import ceil_seconds
from toplist.domain.service import JWTService
from toplist.interface.api.identity import extract_token, resolve_voter

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)


@router.post("/{server_id}", response_model=CastVoteResponse)
async def cast_vote(
    server_id: UUID,
    request: Request,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
    network_settings: FromDishka[NetworkSettings],
) -> CastVoteResponse:
    """Vote for a server.

    Anonymous votes are allowed; logged-in voters are additionally tracked
    by account so that switching networks does not reset the cooldown.

    Args:
        server_id: Server UUID
        request: Incoming request (client address, auth token)
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_settings: Auth settings (cookie name)
        network_settings: Network settings (proxy trust)

    Returns:
        Vote confirmation with the new total

    Raises:
        HTTPException: 404 if the server does not exist, 429 during cooldown

    Example:
        POST /votes/9b2c...

        Response:
        {
            "success": true,
            "server_id": "9b2c...",
            "vote_id": "41d7...",
            "vote_count": 128,
            "message": "Vote recorded successfully!"
        }
    """
    identity = resolve_voter(request, jwt_service, auth_settings, network_settings)

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                server_id=str(server_id),
                ip_address=identity.ip_address,
                user_id=identity.user_id,
            )
        )
    except ServerNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except VoteCooldownActiveError as e:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "message": str(e),
                "hours_remaining": e.remaining_hours_ceil,
                "next_vote_at": e.retry_after.isoformat(),
            },
            headers={"Retry-After": str(ceil_seconds(e.remaining))},
        )


@router.get("/{server_id}/count", response_model=VoteCountResponse)
async def get_vote_count(
    server_id: UUID,
    get_vote_count_use_case: FromDishka[GetVoteCountUseCase],
) -> VoteCountResponse:
    """Get the total number of votes a server has received.

    Args:
        server_id: Server UUID
        get_vote_count_use_case: Get vote count use case from DI

    Returns:
        Server ID and vote total
    """
    return await get_vote_count_use_case.execute(
        VoteCountRequest(server_id=str(server_id))
    )


@router.get("/{server_id}/can-vote", response_model=CanVoteResponse)
async def can_vote(
    server_id: UUID,
    request: Request,
    check_eligibility_use_case: FromDishka[CheckVoteEligibilityUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
    network_settings: FromDishka[NetworkSettings],
) -> CanVoteResponse:
    """Check whether the caller may vote for a server now.

    Args:
        server_id: Server UUID
        request: Incoming request (client address, auth token)
        check_eligibility_use_case: Check eligibility use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_settings: Auth settings (cookie name)
        network_settings: Network settings (proxy trust)

    Returns:
        Eligibility and the time left until the next allowed vote
    """
    identity = resolve_voter(request, jwt_service, auth_settings, network_settings)

    return await check_eligibility_use_case.execute(
        CanVoteRequest(
            server_id=str(server_id),
            ip_address=identity.ip_address,
            user_id=identity.user_id,
        )
    )


@router.get("/{server_id}/stats", response_model=VoteStatsResponse)
async def get_vote_stats(
    server_id: UUID,
    request: Request,
    get_vote_stats_use_case: FromDishka[GetVoteStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
    days: int | None = Query(default=None, ge=1, le=90),
) -> VoteStatsResponse:
    """Get a server's votes per day.

    Requires authentication.

    Args:
        server_id: Server UUID
        request: Incoming request (auth token)
        get_vote_stats_use_case: Get vote stats use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_settings: Auth settings (cookie name)
        days: Window length in days (defaults to the configured window)

    Returns:
        Daily vote counts and the total over the window

    Raises:
        HTTPException: If not authenticated
    """
    user_id = jwt_service.get_user_id_from_token(
        extract_token(request, auth_settings.cookie_name)
    )
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to view vote statistics",
        )

    return await get_vote_stats_use_case.execute(
        VoteStatsRequest(server_id=str(server_id), days=days)
    )
