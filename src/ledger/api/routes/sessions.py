"""Session (login) endpoint."""

from fastapi import APIRouter, Depends

from ledger.api.deps import get_auth_service
from ledger.schemas.auth import LoginRequest, SessionResponse
from ledger.services.auth import AuthService

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post(
    "",
    response_model=SessionResponse,
    summary="Sign in",
    description="Authenticate with email and password to receive a JWT.",
    responses={401: {"description": "Incorrect email or password"}},
)
async def create_session(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    """Authenticate a user and return the account plus an access token."""
    return await auth_service.login(email=data.email, password=data.password)
