"""API routes."""

from fastapi import APIRouter

from ledger.api.routes import health, sessions, transactions, users

router = APIRouter()

# Include routers
router.include_router(health.router)
router.include_router(users.router)
router.include_router(sessions.router)
router.include_router(transactions.router)
