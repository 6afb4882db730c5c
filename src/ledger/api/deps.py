"""FastAPI dependency injection for authentication and database."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.config import Settings, get_settings
from ledger.core.auth import AuthGate, RequestContext
from ledger.db.session import get_db
from ledger.repositories.user import UserRepository
from ledger.services.auth import AuthService
from ledger.services.transaction import TransactionService


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    """Get user repository instance."""
    return UserRepository(db)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """Get authentication service instance."""
    return AuthService(user_repo, settings)


@lru_cache
def get_auth_gate() -> AuthGate:
    """Build the token gate once from configured settings."""
    settings = get_settings()
    return AuthGate(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


async def get_request_context(
    authorization: Annotated[str | None, Header()] = None,
    auth_gate: AuthGate = Depends(get_auth_gate),
) -> RequestContext:
    """
    Resolve the caller from the Authorization header.

    Raises:
        UnauthorizedError: If the header is missing, malformed, or carries an
            invalid or expired token
    """
    return auth_gate.resolve(authorization)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(db)
