# keyword_typeahead/core/debouncer.py
"""
DebouncedLookup - one pending remote lookup per keystroke burst.

schedule() disarms whatever timer is armed and arms a new one, so a burst of
calls closer together than `delay_ms` collapses into a single lookup using the
arguments of the last call. When the timer fires the lookup runs as an asyncio
task and `on_settled` gets exactly one LookupResult (value or error).

Only the timer is cancelable. A lookup already handed to the transport keeps
running; callers guard against late results themselves (see engine.py).
No retries here.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "LookupResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "LookupResult[T]":
        return cls(error=error)


PerformLookup = Callable[[], Awaitable[T]]
OnSettled = Callable[[LookupResult[T]], None]


class DebouncedLookup(Generic[T]):
    """
    Debounce coordinator bound to an asyncio event loop.

    The loop is resolved lazily (running loop at schedule time) unless one is
    passed in, so the same object works inside Textual and inside tests.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending_key: Optional[str] = None
        self._inflight: Set["asyncio.Task[None]"] = set()

    # state -----------------------------------------------------------------
    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired yet."""
        return self._handle is not None

    @property
    def pending_key(self) -> Optional[str]:
        return self._pending_key

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    # scheduling ------------------------------------------------------------
    def schedule(
        self,
        query_key: str,
        perform_lookup: PerformLookup[T],
        on_settled: OnSettled[T],
        delay_ms: float,
    ) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._pending_key = query_key
        self._handle = loop.call_later(
            max(delay_ms, 0) / 1000.0, self._fire, loop, query_key, perform_lookup, on_settled
        )
        logger.debug("armed lookup %r (%sms)", query_key, delay_ms)

    def cancel(self) -> None:
        """Disarm the pending timer, if any. Never invokes a callback."""
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("disarmed lookup %r", self._pending_key)
        self._handle = None
        self._pending_key = None

    def close(self) -> None:
        """Cancel the timer and abandon in-flight lookups (owner is going away)."""
        self.cancel()
        for task in list(self._inflight):
            task.cancel()
        self._inflight.clear()

    # internals -------------------------------------------------------------
    def _fire(
        self,
        loop: asyncio.AbstractEventLoop,
        query_key: str,
        perform_lookup: PerformLookup[T],
        on_settled: OnSettled[T],
    ) -> None:
        self._handle = None
        self._pending_key = None
        logger.debug("firing lookup %r", query_key)
        task = loop.create_task(self._run(perform_lookup, on_settled))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    @staticmethod
    async def _run(perform_lookup: PerformLookup[T], on_settled: OnSettled[T]) -> None:
        try:
            value = await perform_lookup()
        except Exception as exc:
            result: LookupResult[T] = LookupResult.failure(exc)
        else:
            result = LookupResult.success(value)
        try:
            on_settled(result)
        except Exception:
            logger.exception("lookup callback failed")
