"""Allocation of sequential document numbers with bounded retry."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import date

import structlog

from bms.core.modules.counter.fiscal import current_fiscal_year
from bms.core.modules.counter.formatting import format_document_number
from bms.core.modules.counter.models import DocumentType, ScopeKey
from bms.core.modules.counter.store import CounterConflictError, CounterStore
from bms.errors import SequenceExhaustedError
from bms.utils import today_in

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF = 0.1  # seconds, multiplied by the attempt number


class SequenceAllocator:
    """Hands out unique, strictly increasing numbers per document type and fiscal year.

    The allocator holds no lock of its own. Every allocation is a single atomic
    increment-or-create call on the store, and only a uniqueness conflict (two
    callers racing to create a brand-new counter) is retried.
    """

    def __init__(
        self,
        store: CounterStore,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff: float = DEFAULT_BACKOFF,
        clock: Callable[[], date] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.max_attempts = max_attempts
        self.backoff = backoff
        self._clock = clock or today_in("UTC")
        self._sleep = sleep

    def scope_for(self, document_type: DocumentType) -> ScopeKey:
        """Build the counter scope, reading the clock anew for year-scoped types."""
        if not document_type.is_year_scoped:
            return ScopeKey(type=document_type)
        return ScopeKey(type=document_type, year=current_fiscal_year(self._clock))

    async def allocate(self, document_type: DocumentType) -> int:
        value, _ = await self._allocate(document_type)
        return value

    async def generate_formatted_number(self, document_type: DocumentType) -> str | int:
        """Allocate and format: "INV/2024-25/000042" for invoices and bills, the raw int otherwise."""
        value, scope = await self._allocate(document_type)
        return format_document_number(document_type, value, scope.year)

    async def _allocate(self, document_type: DocumentType) -> tuple[int, ScopeKey]:
        for attempt in range(1, self.max_attempts + 1):
            # Recompute the scope on each attempt, a retry may straddle the fiscal boundary
            scope = self.scope_for(document_type)
            try:
                value = await self.store.find_and_increment(scope)
            except CounterConflictError:
                if attempt == self.max_attempts:
                    break
                delay = self.backoff * attempt
                logger.warning(
                    "sequence_conflict_retry",
                    document_type=document_type.value,
                    year=scope.year,
                    attempt=attempt,
                    delay=delay,
                )
                await self._sleep(delay)
                continue
            logger.debug("sequence_allocated", document_type=document_type.value, year=scope.year, value=value)
            return value, scope

        logger.error("sequence_exhausted", document_type=document_type.value, attempts=self.max_attempts)
        raise SequenceExhaustedError(document_type.value, self.max_attempts)
