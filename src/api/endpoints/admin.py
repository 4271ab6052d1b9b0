"""
Admin routes.

- POST /api/admin/login - Exchange the admin secret for a session token
- GET /api/admin/users - Paginated registration listing
- GET /api/admin/stats - Aggregate statistics

Listing and stats require "Authorization: Bearer <secret or session token>".
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import get_admin_service, get_bearer_credential
from src.api.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegistrationView,
    StatsResponse,
    UserListResponse,
)
from src.domain.admin import MAX_PAGE_LIMIT, AdminService
from src.domain.exceptions import AuthError, ValidationError
from src.domain.ports import ListingOrder

router = APIRouter(prefix="/admin", tags=["admin"])


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Password missing"},
        401: {"model": ErrorResponse, "description": "Invalid password"},
    },
    summary="Admin login",
)
def login(
    request_data: LoginRequest,
    service: AdminService = Depends(get_admin_service),
) -> LoginResponse:
    if not request_data.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password is required")

    if not service.login(request_data.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    return LoginResponse(
        success=True,
        token=service.issue_session_token(),
        expires_in=service.session_ttl_seconds,
    )


@router.get(
    "/users",
    response_model=UserListResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid page parameters"},
        401: {"model": ErrorResponse, "description": "Unauthorized"},
    },
    summary="List registrations",
    description="Pages are cut from registrations sorted by email (default) "
    "or by position; each returned page is ordered by position.",
)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_LIMIT),
    order: ListingOrder = Query(ListingOrder.EMAIL),
    credential: str | None = Depends(get_bearer_credential),
    service: AdminService = Depends(get_admin_service),
) -> UserListResponse:
    try:
        result = service.list_users(page, limit, credential, order)
    except AuthError:
        raise _unauthorized() from None
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None

    return UserListResponse(
        users=[RegistrationView.from_registration(r) for r in result.users],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get(
    "/stats",
    response_model=StatsResponse,
    responses={401: {"model": ErrorResponse, "description": "Unauthorized"}},
    summary="Waitlist statistics",
)
def stats(
    credential: str | None = Depends(get_bearer_credential),
    service: AdminService = Depends(get_admin_service),
) -> StatsResponse:
    try:
        result = service.stats(credential)
    except AuthError:
        raise _unauthorized() from None

    return StatsResponse(
        total_users=result.total_users,
        verified_users=result.verified_users,
        unverified_users=result.unverified_users,
        network_stats=result.network_stats,
    )
