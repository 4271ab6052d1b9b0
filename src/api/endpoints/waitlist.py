"""
Waitlist routes.

This module defines the public HTTP endpoints:
- POST /api/waitlist - Join the waitlist
- GET /api/waitlist/{email} - Look up a registration
- GET /api/waitlist - Waitlist size
- GET /api/verify?token= - Verify an email address
"""

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_registration_service, get_verification_service
from src.api.models import (
    ErrorResponse,
    RegisterRequest,
    RegisterResponse,
    RegistrationView,
    TotalResponse,
    VerifyResponse,
)
from src.domain.exceptions import ConflictError, NotFoundError, ValidationError
from src.domain.registration import RegistrationService
from src.domain.verification import VerificationService

router = APIRouter(tags=["waitlist"])


@router.post(
    "/waitlist",
    response_model=RegisterResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email or wallet already registered"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Join the waitlist",
    description="Submit email, wallet address and wallet signature. "
    "A verification link is sent to the provided email.",
)
def join_waitlist(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a new waitlist entry.

    - **email**: Email address to verify
    - **walletAddress**: 0x + 40 hex characters
    - **signature**: 0x + 130 hex characters
    - **network**: Network label or chain id (optional)
    """
    try:
        result = service.register(
            request_data.email,
            request_data.wallet_address,
            request_data.signature,
            request_data.network,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None

    return RegisterResponse(
        position=result.position,
        email=result.email,
        wallet_address=result.wallet_address,
        verified=result.verified,
        needs_verification=result.needs_verification,
    )


@router.get(
    "/waitlist/{email}",
    response_model=RegistrationView,
    responses={404: {"model": ErrorResponse, "description": "Email not found"}},
    summary="Look up a registration",
)
def get_registration(
    email: str,
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationView:
    try:
        registration = service.lookup(email)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    return RegistrationView.from_registration(registration)


@router.get(
    "/waitlist",
    response_model=TotalResponse,
    summary="Waitlist size",
)
def get_total(
    service: RegistrationService = Depends(get_registration_service),
) -> TotalResponse:
    return TotalResponse(total=service.count())


@router.get(
    "/verify",
    response_model=VerifyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing token"},
        404: {"model": ErrorResponse, "description": "Invalid, expired or used token"},
    },
    summary="Verify email address",
    description="Consume the single-use token from the verification email.",
)
def verify_email(
    token: str | None = None,
    service: VerificationService = Depends(get_verification_service),
) -> VerifyResponse:
    try:
        result = service.verify(token)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None

    return VerifyResponse(
        message="Email verified successfully",
        position=result.position,
        email=result.email,
    )
