"""Debounced, token-fenced asynchronous output channel.

Remote calls cannot be aborted once issued, so staleness is detected instead:
each scheduled call captures the channel token current at scheduling time and
its result is applied only if that token is still current when it resolves.
Scheduling again resets the pending debounce timer and bumps the token, which
also fences every call already in flight.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cvtailor.domain.errors import CollaboratorUnavailableError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = logging.getLogger(__name__)

type ChannelCall[T] = Callable[[], Awaitable[T]]
type ResultHandler[T] = Callable[[T], None]


@dataclass(eq=False)
class PreviewChannel[T]:
    name: str
    debounce_seconds: float = 0.45
    token: int = 0
    loading: bool = False
    error: CollaboratorUnavailableError | None = None
    _timer: asyncio.Task[None] | None = field(default=None, init=False, repr=False)
    _tasks: set[asyncio.Task[None]] = field(
        default_factory=set["asyncio.Task[None]"], init=False, repr=False
    )

    @property
    def pending(self) -> bool:
        """Whether a debounce timer is waiting to fire."""

        return self._timer is not None

    def is_current(self, token: int) -> bool:
        return token == self.token

    def schedule(self, call: ChannelCall[T], on_result: ResultHandler[T]) -> int:
        """Issue ``call`` after the quiet window unless rescheduled before then.

        Must be invoked from inside a running event loop.
        """

        self._cancel_timer()
        self.token += 1
        token = self.token
        timer = asyncio.get_running_loop().create_task(
            self._debounced(token, call, on_result),
            name=f"{self.name}-preview-{token}",
        )
        self._track(timer)
        self._timer = timer
        log.debug("Scheduled %s channel call token=%s", self.name, token)
        return token

    async def run_now(self, call: ChannelCall[T], on_result: ResultHandler[T]) -> bool:
        """Issue ``call`` immediately under a fresh token; return whether it was applied."""

        token = self.invalidate()
        return await self._run(token, call, on_result)

    def invalidate(self) -> int:
        """Drop the pending timer and fence all calls in flight."""

        self._cancel_timer()
        self.token += 1
        # fenced calls never clear the flag themselves
        self.loading = False
        return self.token

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and no call is in flight."""

        while self._tasks:
            results = await asyncio.gather(*tuple(self._tasks), return_exceptions=True)
            for result in results:
                if isinstance(result, BaseException) and not isinstance(
                    result, asyncio.CancelledError
                ):
                    raise result

    async def _debounced(
        self,
        token: int,
        call: ChannelCall[T],
        on_result: ResultHandler[T],
    ) -> None:
        await asyncio.sleep(self.debounce_seconds)
        if self._timer is asyncio.current_task():
            self._timer = None
        await self._run(token, call, on_result)

    async def _run(self, token: int, call: ChannelCall[T], on_result: ResultHandler[T]) -> bool:
        if self.is_current(token):
            self.error = None
            self.loading = True
        try:
            result = await call()
        except CollaboratorUnavailableError as exc:
            if self.is_current(token):
                self.error = exc
                log.warning("%s channel call failed: %s", self.name, exc)
            else:
                log.debug("Ignoring failure of stale %s call token=%s", self.name, token)
            return False
        finally:
            if self.is_current(token):
                self.loading = False

        if not self.is_current(token):
            log.debug(
                "Discarding stale %s result token=%s current=%s", self.name, token, self.token
            )
            return False
        on_result(result)
        return True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _track(self, task: asyncio.Task[None]) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
