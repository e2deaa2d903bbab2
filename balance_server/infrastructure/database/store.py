"""Timeouts, bounded read retries and store error translation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from balance_server.core.config import get_settings
from balance_server.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRANSIENT = (OperationalError, asyncio.TimeoutError)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, _TRANSIENT):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


async def guarded_read(operation: Callable[[], Awaitable[T]], *, name: str) -> T:
    """Run a read under the statement timeout, retrying transient failures."""
    settings = get_settings().database
    attempts = settings.read_retries + 1
    last_error: BaseException | None = None

    for attempt in range(attempts):
        try:
            return await asyncio.wait_for(operation(), timeout=settings.statement_timeout)
        except Exception as exc:
            if not _is_transient(exc):
                raise
            last_error = exc
            if attempt < attempts - 1:
                logger.info("Retryable store error in %s (attempt %d/%d): %s", name, attempt + 1, attempts, exc)
                await asyncio.sleep(settings.retry_delay * (attempt + 1))

    logger.error("Store read %s failed after %d attempts", name, attempts, exc_info=last_error)
    raise StoreUnavailableError() from last_error


async def guarded_write(operation: Callable[[], Awaitable[T]], *, name: str) -> T:
    """Run a write under the statement timeout; transient failures are surfaced, never retried."""
    settings = get_settings().database
    try:
        return await asyncio.wait_for(operation(), timeout=settings.statement_timeout)
    except StaleDataError as exc:
        logger.warning("Concurrent modification during %s: %s", name, exc)
        raise StoreUnavailableError("Record was modified concurrently, retry the request") from exc
    except Exception as exc:
        if not _is_transient(exc):
            raise
        logger.error("Store write %s failed", name, exc_info=exc)
        raise StoreUnavailableError() from exc
