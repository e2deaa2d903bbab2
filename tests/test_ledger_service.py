import asyncio
import logging
from decimal import Decimal

import pytest

from balance_server.core.errors import ErrorKind, ValidationError
from balance_server.core.money import MAX_BALANCE_CENTS, format_cents
from balance_server.infrastructure.database.repositories import SqlLedgerRepository, SqlUserRepository
from balance_server.modules.ledger import (
    AccountState,
    BalanceChange,
    InsufficientFundsError,
    InvalidAmountError,
    LedgerInconsistencyError,
    LedgerService,
    TransactionStatus,
    TransactionType,
)
from balance_server.modules.users import UserInactiveError, UserNotFoundError


async def test_deposit_records_balance_on_both_sides(session, ledger_service, user_service, verified_user):
    entry = await ledger_service.deposit(verified_user.id, Decimal("100"), "Initial deposit")
    await session.commit()

    assert entry.type is TransactionType.DEPOSIT
    assert entry.status is TransactionStatus.COMPLETED
    assert entry.amount_cents == 10000
    assert entry.balance_before_cents == 0
    assert entry.balance_after_cents == 10000
    assert (await user_service.require_user(verified_user.id)).balance_cents == 10000


async def test_withdraw_reduces_balance(session, ledger_service, user_service, verified_user):
    await ledger_service.deposit(verified_user.id, "50.25", "Salary")
    entry = await ledger_service.withdraw(verified_user.id, "20.10", "Groceries")
    await session.commit()

    assert entry.type is TransactionType.WITHDRAWAL
    assert entry.balance_before_cents == 5025
    assert entry.balance_after_cents == 3015
    assert (await user_service.require_user(verified_user.id)).balance_cents == 3015


async def test_withdraw_of_entire_balance_is_allowed(session, ledger_service, verified_user):
    await ledger_service.deposit(verified_user.id, 30, "Top up")
    entry = await ledger_service.withdraw(verified_user.id, 30, "Everything")

    assert entry.balance_after_cents == 0


async def test_insufficient_funds_leaves_state_unchanged(session, ledger_service, user_service, verified_user):
    await ledger_service.deposit(verified_user.id, "10", "Top up")
    await session.commit()

    with pytest.raises(InsufficientFundsError) as exc_info:
        await ledger_service.withdraw(verified_user.id, "10.01", "Too much")
    assert exc_info.value.kind is ErrorKind.INSUFFICIENT_FUNDS
    assert exc_info.value.status_code == 409
    await session.rollback()

    assert (await user_service.require_user(verified_user.id)).balance_cents == 1000
    history = await ledger_service.get_history(verified_user.id)
    assert history.total == 1


@pytest.mark.parametrize("amount", ["0", "-5", "1.005", "abc"])
async def test_invalid_amounts_are_rejected_before_any_write(ledger_service, verified_user, amount):
    with pytest.raises(InvalidAmountError):
        await ledger_service.deposit(verified_user.id, amount, "Bad")

    history = await ledger_service.get_history(verified_user.id)
    assert history.total == 0


async def test_description_is_required(ledger_service, verified_user):
    with pytest.raises(ValidationError):
        await ledger_service.deposit(verified_user.id, "5", "   ")


async def test_unknown_and_inactive_users_are_rejected(session, ledger_service, user_service, verified_user):
    with pytest.raises(UserNotFoundError):
        await ledger_service.deposit("missing-user", "5", "Nope")

    await user_service.set_active(verified_user.id, False)
    await session.commit()
    with pytest.raises(UserInactiveError):
        await ledger_service.deposit(verified_user.id, "5", "Nope")


async def test_history_is_newest_first_and_paginated(session, ledger_service, verified_user):
    for index in range(1, 6):
        await ledger_service.deposit(verified_user.id, index, f"Deposit {index}")
    await session.commit()

    first_page = await ledger_service.get_history(verified_user.id, page=1, page_size=2)
    last_page = await ledger_service.get_history(verified_user.id, page=3, page_size=2)

    assert [entry.description for entry in first_page.entries] == ["Deposit 5", "Deposit 4"]
    assert [entry.description for entry in last_page.entries] == ["Deposit 1"]
    assert first_page.total == 5
    assert first_page.pages == 3


async def test_history_honours_large_page_size(session, ledger_service, verified_user):
    for index in range(1, 4):
        await ledger_service.deposit(verified_user.id, index, f"Deposit {index}")
    await session.commit()

    history = await ledger_service.get_history(verified_user.id, page="x", page_size=250)
    beyond = await ledger_service.get_history(verified_user.id, page=2, page_size=250)

    assert history.page == 1
    assert history.limit == 250
    assert history.pages == 1
    assert len(history.entries) == 3
    assert beyond.entries == []
    assert beyond.pages == 1


async def test_deposit_above_maximum_amount_is_rejected(ledger_service, verified_user):
    with pytest.raises(InvalidAmountError):
        await ledger_service.deposit(verified_user.id, "100000000000000000000", "Too big")

    history = await ledger_service.get_history(verified_user.id)
    assert history.total == 0


async def test_deposit_past_maximum_balance_changes_nothing(session, ledger_service, user_service, verified_user):
    limit = format_cents(MAX_BALANCE_CENTS)
    await ledger_service.deposit(verified_user.id, limit, "Fill up")
    await session.commit()

    with pytest.raises(InvalidAmountError) as exc_info:
        await ledger_service.deposit(verified_user.id, "0.01", "Overflow")
    assert exc_info.value.kind is ErrorKind.INVALID_AMOUNT
    await session.rollback()

    assert (await user_service.require_user(verified_user.id)).balance_cents == MAX_BALANCE_CENTS
    assert (await ledger_service.get_history(verified_user.id)).total == 1


async def test_concurrent_deposits_are_not_lost(session_factory, settings, verified_user):
    async def _deposit(index: int) -> None:
        async with session_factory() as session:
            service = LedgerService(SqlLedgerRepository(session), settings.ledger)
            await service.deposit(verified_user.id, "1.00", f"Parallel {index}")
            await session.commit()

    await asyncio.gather(*(_deposit(index) for index in range(10)))

    async with session_factory() as session:
        user = await SqlUserRepository(session).get_by_id(verified_user.id)
        history = await LedgerService(SqlLedgerRepository(session), settings.ledger).get_history(
            verified_user.id, page_size=100
        )

    assert user.balance_cents == 1000
    assert history.total == 10
    # every entry's after-balance is unique and the chain is contiguous
    afters = sorted(entry.balance_after_cents for entry in history.entries)
    assert afters == [100 * step for step in range(1, 11)]
    for entry in history.entries:
        assert entry.balance_after_cents - entry.balance_before_cents == entry.amount_cents


class _FailingAppendRepository:
    """Applies the balance change but fails to record the ledger entry."""

    def __init__(self) -> None:
        self.balance = 0

    async def apply_delta(self, user_id, delta_cents):
        before = self.balance
        self.balance += delta_cents
        return BalanceChange(balance_before_cents=before, balance_after_cents=self.balance)

    async def get_account_state(self, user_id):
        return AccountState(exists=True, is_active=True, balance_cents=self.balance)

    async def add_entry(self, **kwargs):
        raise RuntimeError("disk full")

    async def list_entries(self, user_id, offset, limit):
        return [], 0


async def test_append_failure_raises_ledger_inconsistency(caplog):
    service = LedgerService(_FailingAppendRepository())

    with caplog.at_level(logging.CRITICAL, logger="balance_server.modules.ledger.service"):
        with pytest.raises(LedgerInconsistencyError) as exc_info:
            await service.deposit("user-1", "5", "Lost entry")

    assert exc_info.value.kind is ErrorKind.LEDGER_INCONSISTENT
    assert any("reconciliation required" in record.getMessage() for record in caplog.records)
