"""Cooperative cancellation for in-flight requests."""

import asyncio
from typing import Any, Optional


class AbortSignal:
    """Token handed to an operation so its request can be aborted.

    The transport races the request against `wait()`; the signal itself
    never touches the request.
    """

    def __init__(self):
        self._event = asyncio.Event()
        self.reason: Optional[Any] = None

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()

    def _abort(self, reason: Optional[Any]) -> None:
        if self.aborted:
            return
        self.reason = reason
        self._event.set()


class AbortController:
    """Owner of an AbortSignal, usually scoped to one view's lifetime."""

    def __init__(self):
        self.signal = AbortSignal()

    def abort(self, reason: Optional[Any] = None) -> None:
        self.signal._abort(reason)


class RequestAborted(Exception):
    """Raised inside the transport when a request's signal fires."""

    def __init__(self, reason: Optional[Any] = None):
        super().__init__(reason or "request aborted")
        self.reason = reason
