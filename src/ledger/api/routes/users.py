"""Account creation endpoint."""

from fastapi import APIRouter, Depends, status

from ledger.api.deps import get_auth_service
from ledger.schemas.auth import UserCreate, UserResponse
from ledger.services.auth import AuthService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create account",
    description="Create a new account with email and password.",
    responses={409: {"description": "Email already in use"}},
)
async def create_user(
    data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Register a new account.

    Raises:
        400: Validation error
        409: Email already registered
    """
    user = await auth_service.register(
        email=data.email,
        password=data.password,
        name=data.name,
    )
    return UserResponse.model_validate(user)
