"""Account registration and session issuance."""

import logging
from datetime import timedelta

from ledger.config import Settings
from ledger.core.exceptions import ConflictError, UnauthorizedError
from ledger.core.security import create_access_token, hash_password, verify_password
from ledger.models.user import User
from ledger.repositories.user import UserRepository
from ledger.schemas.auth import SessionResponse, UserResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, user_repo: UserRepository, settings: Settings):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository for database operations
            settings: Settings holding the JWT secret and lifetime
        """
        self.user_repo = user_repo
        self.settings = settings

    async def register(self, email: str, password: str, name: str | None = None) -> User:
        """
        Register a new user.

        Raises:
            ConflictError: If email already exists
        """
        if await self.user_repo.email_exists(email):
            raise ConflictError("USER_001")

        user = User(
            email=email,
            name=name,
            password_hash=hash_password(password),
        )
        created_user = await self.user_repo.create(user)
        logger.info("User registered", extra={"user_id": str(created_user.id)})
        return created_user

    async def login(self, email: str, password: str) -> SessionResponse:
        """
        Authenticate a user and issue an access token.

        Unknown emails and wrong passwords fail the same way.

        Raises:
            UnauthorizedError: If credentials are invalid
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise UnauthorizedError("AUTH_003")

        token = create_access_token(
            user.id,
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expires_delta=timedelta(minutes=self.settings.jwt_expire_minutes),
        )
        return SessionResponse(user=UserResponse.model_validate(user), token=token)
