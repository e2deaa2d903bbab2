"""Deposit, withdrawal and history endpoints for the authenticated user."""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from balance_server.interfaces.http.deps import get_current_user, get_db_session, get_ledger_service
from balance_server.modules.ledger import LedgerService
from balance_server.modules.users import User
from balance_server.schemas import (
    AmountRequest,
    TransactionListResponse,
    TransactionResponse,
    TransactionResultResponse,
)

router = APIRouter()


@router.post("/deposit", response_model=TransactionResultResponse, summary="Deposit funds")
async def deposit(
    payload: AmountRequest,
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
    db: AsyncSession = Depends(get_db_session),
) -> TransactionResultResponse:
    entry = await ledger.deposit(user.id, payload.amount, payload.description)
    await db.commit()
    return TransactionResultResponse(message="Deposit successful", transaction=TransactionResponse.from_domain(entry))


@router.post("/withdraw", response_model=TransactionResultResponse, summary="Withdraw funds")
async def withdraw(
    payload: AmountRequest,
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
    db: AsyncSession = Depends(get_db_session),
) -> TransactionResultResponse:
    entry = await ledger.withdraw(user.id, payload.amount, payload.description)
    await db.commit()
    return TransactionResultResponse(message="Withdrawal successful", transaction=TransactionResponse.from_domain(entry))


@router.get("/history", response_model=TransactionListResponse, summary="Transaction history, newest first")
async def list_transactions(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    history = await ledger.get_history(user.id, page, limit)
    return TransactionListResponse.from_domain(history)
