"""Transaction endpoints. All of them require a bearer token."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from ledger.api.deps import get_request_context, get_transaction_service
from ledger.core.auth import RequestContext
from ledger.schemas.transaction import (
    ImportRequest,
    ImportResult,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from ledger.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get(
    "",
    response_model=list[TransactionResponse],
    summary="List transactions",
    description="""
    List the caller's transactions, newest first.

    Pass **year** and **month** together to restrict the list to that
    calendar month (first day 00:00:00 to last day 23:59:59, inclusive).
    Either one on its own is ignored.
    """,
)
async def list_transactions(
    year: Annotated[int | None, Query(ge=1, le=9999, description="Calendar year")] = None,
    month: Annotated[int | None, Query(ge=1, le=12, description="Month (1-12)")] = None,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> list[TransactionResponse]:
    transactions = await service.list_transactions(ctx, year=year, month=month)
    return [TransactionResponse.model_validate(txn) for txn in transactions]


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create transaction",
)
async def create_transaction(
    payload: TransactionCreate,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """
    Create one transaction.

    Raises:
        400: A required field is missing or malformed
        401: Missing or invalid token
    """
    transaction = await service.create_transaction(ctx, payload)
    return TransactionResponse.model_validate(transaction)


@router.post(
    "/import",
    response_model=ImportResult,
    status_code=status.HTTP_201_CREATED,
    summary="Import transactions from statement text",
    description="""
    Bulk-create expenses from pasted statement text, one per line:

        05/09/2025 - Ifood Delivery - R$ 45,90

    Each line is categorized from its description. Lines that don't match
    the format are skipped; only the number created is reported.
    """,
)
async def import_transactions(
    payload: ImportRequest,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> ImportResult:
    created_count = await service.import_statement(ctx, payload.text_content)
    return ImportResult(
        message=f"{created_count} transactions imported successfully.",
        created_count=created_count,
    )


@router.put(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Update transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def update_transaction(
    transaction_id: UUID,
    payload: TransactionUpdate,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """
    Change only the fields present in the payload.

    Raises:
        404: Transaction not found (or owned by another user)
    """
    transaction = await service.update_transaction(ctx, transaction_id, payload)
    return TransactionResponse.model_validate(transaction)


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def delete_transaction(
    transaction_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    service: TransactionService = Depends(get_transaction_service),
) -> Response:
    await service.delete_transaction(ctx, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
