"""Transport protocol and adapters for delivering validated payloads.

A transport makes a single delivery attempt per call and reports the
outcome as a response message, or ``None`` for a transport-level failure
such as lost connectivity. Senders depend only on :class:`Transport`;
concrete transports are always injected.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import logging
from typing import Generic, Protocol, TypeVar

LOGGER = logging.getLogger(__name__)

P = TypeVar("P")
R = TypeVar("R")
P_contra = TypeVar("P_contra", contravariant=True)
R_co = TypeVar("R_co", covariant=True)


class Transport(Protocol[P_contra, R_co]):
    """Deliver one payload and resolve to the response, or None on failure."""

    async def send(self, payload: P_contra) -> R_co | None: ...


class BlockingTransport(Generic[P, R]):
    """Run a blocking ``send(payload)`` function in a worker thread.

    The result is awaited on the caller's event loop, so state updates that
    follow never run on the worker thread.
    """

    def __init__(self, send: Callable[[P], R | None]) -> None:
        self._send = send

    async def send(self, payload: P) -> R | None:
        return await asyncio.to_thread(self._send, payload)


class CallbackTransport(Generic[P, R]):
    """Adapt a completion-callback API to the :class:`Transport` protocol.

    ``send(payload, on_complete)`` may invoke ``on_complete`` from any thread,
    including synchronously before it returns. Every completion is marshalled
    onto the event loop that started the send; only the first one counts.
    """

    def __init__(self, send: Callable[[P, Callable[[R | None], None]], None]) -> None:
        self._send = send

    async def send(self, payload: P) -> R | None:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[R | None] = loop.create_future()

        def _resolve(result: R | None) -> None:
            if future.done():
                LOGGER.warning(
                    "transport.completion.ignored",
                    extra={"event": "transport.completion.ignored"},
                )
                return
            future.set_result(result)

        def on_complete(result: R | None) -> None:
            loop.call_soon_threadsafe(_resolve, result)

        self._send(payload, on_complete)
        return await future
