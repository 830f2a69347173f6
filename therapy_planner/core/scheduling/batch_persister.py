"""
Batch persister for generated sessions.

Writes session records through the persistence collaborator, one call per
session. Sessions are grouped into contiguous batches for progress
reporting; every batch is started at once, so the batch size does not
limit concurrency. The worker pool size (max_concurrency) does: None
keeps the unbounded fan-out, an integer caps in-flight writes.

All writes are awaited to completion even when some fail, so the result
always lists every record that was committed and the caller can
compensate.

Dependencies: asyncio, tenacity
System role: Concurrent bulk session creation
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential_jitter

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10

_SKIPPED = object()


class SessionRecordWriter(Protocol):
    """Persistence collaborator used by the batch persister."""

    async def create_session_record(self, fields: dict[str, Any]) -> Any:
        ...


@dataclass(frozen=True)
class CreatedSession:
    """Echo of a committed session record."""

    id: Any
    ordinal: int
    session_number: str | None
    title: str | None
    date: Any
    status: str | None

    @classmethod
    def from_record(cls, record: Any, fields: dict[str, Any]) -> "CreatedSession":
        status = getattr(record, "status", None) or fields.get("status")
        return cls(
            id=getattr(record, "id", None),
            ordinal=getattr(record, "ordinal", None) or fields["ordinal"],
            session_number=getattr(record, "session_number", fields.get("session_number")),
            title=getattr(record, "title", fields.get("title")),
            date=getattr(record, "date", fields.get("date")),
            status=getattr(status, "value", status),
        )


@dataclass(frozen=True)
class SessionWriteFailure:
    """A session write that raised after all retry attempts."""

    ordinal: int
    batch_index: int
    error_type: str
    message: str


@dataclass(frozen=True)
class BatchStatistics:
    """Aggregate timing for one persist() call."""

    sessions_created: int
    total_time_ms: int
    batches_used: int
    avg_time_per_session_ms: int


@dataclass
class BatchResult:
    """Outcome of a persist() call."""

    created: list[CreatedSession] = field(default_factory=list)
    errors: list[SessionWriteFailure] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    statistics: BatchStatistics = field(
        default_factory=lambda: BatchStatistics(0, 0, 0, 0)
    )
    cancelled: bool = False

    @property
    def success(self) -> bool:
        return not self.errors and not self.skipped

    @property
    def succeeded(self) -> int:
        return len(self.created)

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def first_error_message(self) -> str | None:
        if not self.errors:
            return None
        first = min(self.errors, key=lambda e: e.ordinal)
        return f"{first.error_type}: {first.message}"


def partition(items: Sequence[Any], batch_size: int) -> list[list[Any]]:
    """
    Split items into contiguous chunks of batch_size.

    Raises:
        ValueError: If batch_size is less than 1
    """
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    return [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]


class BatchPersister:
    """
    Concurrent session writer with batch progress reporting.

    Attributes:
        writer: Collaborator exposing create_session_record(fields)
        batch_size: Sessions per reporting batch
        max_concurrency: Worker pool size, None for unbounded fan-out
        retry_attempts: Attempts per write (1 disables retry)
        stop_on_failure: Stop submitting queued writes after the first failure
    """

    def __init__(
        self,
        writer: SessionRecordWriter,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_concurrency: int | None = None,
        retry_attempts: int = 1,
        retry_wait_initial: float = 0.5,
        retry_wait_max: float = 5.0,
        stop_on_failure: bool = True,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1 or None")
        if retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")

        self.writer = writer
        self.batch_size = batch_size
        self.max_concurrency = max_concurrency
        self.retry_attempts = retry_attempts
        self.retry_wait_initial = retry_wait_initial
        self.retry_wait_max = retry_wait_max
        self.stop_on_failure = stop_on_failure

    async def persist(
        self,
        sessions: Sequence[dict[str, Any]],
        cancel_event: asyncio.Event | None = None,
    ) -> BatchResult:
        """
        Create all session records.

        Args:
            sessions: Record field maps, each with an "ordinal" key
            cancel_event: Once set, writes not yet started are skipped;
                writes already in flight run to completion

        Returns:
            BatchResult: Created echoes (sorted by ordinal), failures,
                skipped ordinals and statistics
        """
        start = time.perf_counter()
        batches = partition(sessions, self.batch_size)
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        halt = asyncio.Event()
        total = len(sessions)
        created_count = 0

        logger.info(
            f"Creating {total} sessions in {len(batches)} batches of {self.batch_size}",
            extra={
                "session_count": total,
                "batch_count": len(batches),
                "max_concurrency": self.max_concurrency,
            },
        )

        async def write(fields: dict[str, Any]) -> Any:
            if semaphore is None:
                return await self._submit(fields, cancel_event, halt)
            async with semaphore:
                return await self._submit(fields, cancel_event, halt)

        async def run_batch(index: int, batch: list[dict[str, Any]]) -> list[Any]:
            nonlocal created_count
            outcomes = await asyncio.gather(
                *(write(fields) for fields in batch),
                return_exceptions=True,
            )
            created_count += sum(
                1 for o in outcomes
                if o is not _SKIPPED and not isinstance(o, BaseException)
            )
            logger.info(
                f"Batch {index + 1}/{len(batches)} complete: "
                f"{created_count}/{total} sessions created"
            )
            return outcomes

        batch_outcomes = await asyncio.gather(
            *(run_batch(index, batch) for index, batch in enumerate(batches))
        )

        result = BatchResult(
            cancelled=cancel_event is not None and cancel_event.is_set(),
        )
        for batch_index, (batch, outcomes) in enumerate(zip(batches, batch_outcomes)):
            for fields, outcome in zip(batch, outcomes):
                if outcome is _SKIPPED:
                    result.skipped.append(fields["ordinal"])
                elif isinstance(outcome, BaseException):
                    result.errors.append(
                        SessionWriteFailure(
                            ordinal=fields["ordinal"],
                            batch_index=batch_index,
                            error_type=type(outcome).__name__,
                            message=str(outcome),
                        )
                    )
                else:
                    result.created.append(CreatedSession.from_record(outcome, fields))

        result.created.sort(key=lambda s: s.ordinal)
        result.skipped.sort()
        result.errors.sort(key=lambda e: e.ordinal)

        elapsed_ms = int(round((time.perf_counter() - start) * 1000))
        result.statistics = BatchStatistics(
            sessions_created=len(result.created),
            total_time_ms=elapsed_ms,
            batches_used=len(batches),
            avg_time_per_session_ms=(
                round(elapsed_ms / len(result.created)) if result.created else 0
            ),
        )

        if result.success:
            logger.info(
                f"Created {result.succeeded} sessions in {elapsed_ms}ms",
                extra={"sessions_created": result.succeeded, "total_time_ms": elapsed_ms},
            )
        else:
            logger.warning(
                "Batch persistence incomplete",
                extra={
                    "succeeded": result.succeeded,
                    "failed": result.failed,
                    "skipped": len(result.skipped),
                    "cancelled": result.cancelled,
                },
            )

        return result

    async def _submit(
        self,
        fields: dict[str, Any],
        cancel_event: asyncio.Event | None,
        halt: asyncio.Event,
    ) -> Any:
        if halt.is_set() or (cancel_event is not None and cancel_event.is_set()):
            return _SKIPPED
        try:
            return await self._create_with_retry(fields)
        except Exception:
            if self.stop_on_failure:
                halt.set()
            raise

    async def _create_with_retry(self, fields: dict[str, Any]) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential_jitter(
                initial=self.retry_wait_initial,
                max=self.retry_wait_max,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"Retrying session {fields.get('ordinal')} write "
                f"({retry_state.attempt_number}/{self.retry_attempts})"
            ),
            reraise=True,
        ):
            with attempt:
                record = await self.writer.create_session_record(fields)
        return record
