"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
JSON field names are camelCase; Python attributes are snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from src.domain.models import Registration


class CamelModel(BaseModel):
    """Base model serializing attributes under camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    """Request model for joining the waitlist."""

    email: EmailStr
    wallet_address: str = Field(..., description="0x-prefixed 40 hex character address")
    signature: str = Field(..., description="0x-prefixed 130 hex character wallet signature")
    network: str | None = Field("unknown", description="Network label or hex chain id")


class RegisterResponse(CamelModel):
    """Response model for successful registration."""

    position: int
    email: str
    wallet_address: str
    verified: bool
    needs_verification: bool


class RegistrationView(CamelModel):
    """Public view of a registration. Never includes the verification token."""

    email: str
    wallet_address: str
    signature: str
    network: str
    joined_at: datetime
    position: int
    verified: bool
    verified_at: datetime | None = None

    @classmethod
    def from_registration(cls, registration: Registration) -> "RegistrationView":
        return cls(
            email=registration.email,
            wallet_address=registration.wallet_address,
            signature=registration.signature,
            network=registration.network,
            joined_at=registration.joined_at,
            position=registration.position,
            verified=registration.verified,
            verified_at=registration.verified_at,
        )


class TotalResponse(CamelModel):
    """Response model for the waitlist size."""

    total: int


class VerifyResponse(CamelModel):
    """Response model for successful email verification."""

    message: str
    position: int
    email: str


class LoginRequest(CamelModel):
    """Request model for admin login."""

    password: str | None = None


class LoginResponse(CamelModel):
    """Response model for successful admin login."""

    success: bool
    token: str
    expires_in: int


class UserListResponse(CamelModel):
    """Response model for one page of the admin user listing."""

    users: list[RegistrationView]
    total: int
    page: int
    limit: int
    total_pages: int


class StatsResponse(CamelModel):
    """Response model for admin statistics."""

    total_users: int
    verified_users: int
    unverified_users: int
    network_stats: dict[str, int]


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
