"""Owner-scoped transaction operations and statement import.

Every method takes the caller's RequestContext and only ever touches rows
whose user_id matches it.
"""

import calendar
import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ledger.categorization.rules import categorize
from ledger.core.auth import RequestContext
from ledger.core.exceptions import NotFoundError, ValidationError
from ledger.models.transaction import Transaction, TransactionType
from ledger.parsers.statement_text import StatementTextParser
from ledger.repositories.transaction import TransactionRepository
from ledger.schemas.transaction import TransactionCreate, TransactionUpdate, normalize_date

logger = logging.getLogger(__name__)


def month_range(year: int, month: int) -> tuple[datetime, datetime]:
    """Inclusive UTC bounds of a calendar month.

    Returns:
        (first day 00:00:00, last day 23:59:59)

    Raises:
        ValidationError: If year or month is out of range
    """
    if not 1 <= month <= 12:
        raise ValidationError("VAL_002", details={"month": month})
    try:
        last_day = calendar.monthrange(year, month)[1]
        start = datetime(year, month, 1, tzinfo=timezone.utc)
        end = datetime(year, month, last_day, 23, 59, 59, tzinfo=timezone.utc)
    except ValueError as exc:
        raise ValidationError("VAL_001", details={"year": year}) from exc
    return start, end


class TransactionService:
    """Service layer for listing, editing and importing transactions."""

    def __init__(self, db: AsyncSession):
        """Initialize transaction service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.parser = StatementTextParser()

    async def list_transactions(
        self, ctx: RequestContext, year: int | None = None, month: int | None = None
    ) -> list[Transaction]:
        """List the caller's transactions, newest first.

        The month filter applies only when both year and month are given.
        """
        start = end = None
        if year is not None and month is not None:
            start, end = month_range(year, month)
        return await self.transaction_repo.list_by_user(ctx.owner_id, start, end)

    async def create_transaction(
        self, ctx: RequestContext, data: TransactionCreate
    ) -> Transaction:
        """Create a transaction owned by the caller."""
        transaction = Transaction(
            user_id=ctx.owner_id,
            title=data.title,
            amount=data.amount,
            type=data.type,
            category=data.category,
            date=normalize_date(data.date),
        )
        try:
            created = await self.transaction_repo.create(transaction)
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Transaction created",
            extra={"user_id": str(ctx.owner_id), "transaction_id": str(created.id)},
        )
        return created

    async def update_transaction(
        self, ctx: RequestContext, transaction_id: UUID, data: TransactionUpdate
    ) -> Transaction:
        """Apply a partial update to one of the caller's transactions.

        Raises:
            NotFoundError: If the transaction doesn't exist or isn't the caller's
        """
        await self._get_owned(ctx, transaction_id)

        changes = data.changes()
        if "date" in changes:
            changes["date"] = normalize_date(changes["date"])

        try:
            updated = await self.transaction_repo.update(transaction_id, changes)
        except Exception:
            await self.db.rollback()
            raise
        if updated is None:
            raise NotFoundError("TXN_001")

        logger.info(
            "Transaction updated",
            extra={
                "user_id": str(ctx.owner_id),
                "transaction_id": str(transaction_id),
                "fields": sorted(changes),
            },
        )
        return updated

    async def delete_transaction(self, ctx: RequestContext, transaction_id: UUID) -> None:
        """Permanently delete one of the caller's transactions.

        Raises:
            NotFoundError: If the transaction doesn't exist or isn't the caller's
        """
        await self._get_owned(ctx, transaction_id)
        try:
            await self.transaction_repo.delete(transaction_id)
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Transaction deleted",
            extra={"user_id": str(ctx.owner_id), "transaction_id": str(transaction_id)},
        )

    async def import_statement(self, ctx: RequestContext, raw_text: str) -> int:
        """Parse, categorize and bulk-insert statement lines as expenses.

        Lines that can't be parsed are left out. The whole batch goes in with
        one INSERT; a database failure fails the batch.

        Returns:
            Number of transactions created
        """
        rows = [
            {
                "user_id": ctx.owner_id,
                "title": entry.description,
                "amount": entry.amount,
                "type": TransactionType.EXPENSE,
                "category": categorize(entry.description),
                "date": normalize_date(entry.date),
            }
            for entry in self.parser.parse(raw_text)
        ]

        try:
            created_count = await self.transaction_repo.create_many(rows)
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Statement imported",
            extra={"user_id": str(ctx.owner_id), "created_count": created_count},
        )
        return created_count

    async def _get_owned(self, ctx: RequestContext, transaction_id: UUID) -> Transaction:
        transaction = await self.transaction_repo.get_by_user(ctx.owner_id, transaction_id)
        if transaction is None:
            raise NotFoundError("TXN_001")
        return transaction
