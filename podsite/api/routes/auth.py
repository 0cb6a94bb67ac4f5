"""Admin sign-in and sign-up, delegated to the identity provider.

These routes are called with the public anon key; token checks for the
key itself happen at the hosting gateway, not here.
"""

import structlog
from fastapi import APIRouter, Depends

from podsite.api.dependencies import get_identity_provider
from podsite.api.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
)
from podsite.auth.identity import IdentityProvider

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Sign in",
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def login(
    credentials: LoginRequest,
    identity: IdentityProvider = Depends(get_identity_provider),
) -> LoginResponse:
    session = identity.sign_in(credentials.email, credentials.password)
    return LoginResponse(success=True, access_token=session.access_token, user=session.user)


@router.post(
    "/signup",
    response_model=SignupResponse,
    summary="Create an admin account",
    responses={400: {"model": ErrorResponse, "description": "Signup rejected"}},
)
async def signup(
    request: SignupRequest,
    identity: IdentityProvider = Depends(get_identity_provider),
) -> SignupResponse:
    """
    Create a user with a confirmed email address.

    The ``name`` is stored in the user's metadata.
    """
    user = identity.sign_up(request.email, request.password, request.name)
    return SignupResponse(success=True, user=user)
