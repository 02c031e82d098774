"""Submission state machine binding a draft to a send strategy."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import replace
import logging
from typing import Any, Generic, TypeVar

from .exceptions import DraftRejectedError, SubmissionInFlightError
from .messages import Draft, ImageRef, SendableKind
from .state import (
    ConnectionFailed,
    Invalid,
    Ready,
    Sending,
    Sent,
    SubmissionState,
    evaluate,
)
from .strategy import SendStrategy, strategy_from_config
from .task_manager import TaskManager
from .transport import Transport
from .validation import RejectionReason, check

LOGGER = logging.getLogger(__name__)

P = TypeVar("P")
R = TypeVar("R")

Observer = Callable[[], None]

_UNSET: Any = object()


class MessageSender(Generic[P, R]):
    """Validate a draft, send it through the strategy's transport, and report state.

    The sender belongs to one asyncio event loop. Every committed transition
    calls the observer synchronously, in order; the observer reads
    :attr:`state` to see what changed. Validation and transport failures are
    reported only through state, never raised.
    """

    def __init__(
        self,
        strategy: SendStrategy[P, R],
        draft: Draft | None = None,
        *,
        observer: Observer | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._strategy = strategy
        self._draft = draft if draft is not None else Draft()
        self._observer = observer
        self._timeout_seconds = timeout_seconds or None
        self._tasks = TaskManager()
        self._state: SubmissionState = evaluate(strategy.validator, self._draft)

    @classmethod
    def from_config(
        cls,
        kind: SendableKind,
        transport: Transport[Any, Any],
        config: dict[str, Any],
        draft: Draft | None = None,
        *,
        observer: Observer | None = None,
    ) -> MessageSender[Any, Any]:
        """Build a sender whose limits and timeout come from loaded config."""
        transport_cfg = config.get("transport", {})
        return cls(
            strategy_from_config(kind, transport, config),
            draft,
            observer=observer,
            timeout_seconds=float(transport_cfg.get("timeout_seconds", 0)),
        )

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def draft(self) -> Draft:
        return self._draft

    @property
    def strategy(self) -> SendStrategy[P, R]:
        return self._strategy

    @property
    def kind(self) -> SendableKind:
        return self._strategy.kind

    @property
    def in_flight(self) -> bool:
        """Whether a delivery attempt has been scheduled and not yet finished."""
        return self._tasks.pending() > 0

    def set_observer(self, observer: Observer | None) -> None:
        """Register the single observer, or clear it with ``None``."""
        self._observer = observer

    def validate(self) -> P | RejectionReason:
        """Check the current draft without changing state or notifying."""
        return check(self._strategy.validator, self._draft)

    def update_draft(
        self,
        *,
        text: str | None = _UNSET,
        image: ImageRef | None = _UNSET,
    ) -> SubmissionState:
        """Change draft fields and re-validate.

        Omitted fields keep their value; pass ``None`` to clear one. An
        invalid draft always produces a fresh ``Invalid`` notification. A
        valid draft moves to ``Ready`` unless the sender is already there.
        While an attempt is in flight the draft changes but the state is left
        to the attempt.
        """
        changes: dict[str, Any] = {}
        if text is not _UNSET:
            changes["text"] = text
        if image is not _UNSET:
            changes["image"] = image
        self._draft = replace(self._draft, **changes)

        if isinstance(self._state, Sending):
            LOGGER.warning(
                "submission.draft_changed_while_sending",
                extra={
                    "event": "submission.draft_changed_while_sending",
                    "kind": self.kind.value,
                },
            )
            return self._state

        resting = evaluate(self._strategy.validator, self._draft)
        if isinstance(resting, Ready) and isinstance(self._state, Ready):
            return self._state
        self._transition(resting)
        return self._state

    def send(self) -> asyncio.Task[SubmissionState] | None:
        """Start one delivery attempt for the current draft.

        Returns the task that resolves the attempt, or ``None`` when the draft
        is invalid and the transport was not called. Must be called from
        within the owning event loop. If the observer raises on the
        ``Sending`` notification the error propagates, but the attempt is
        already scheduled and still resolves the state.
        """
        if isinstance(self._state, Sending):
            raise SubmissionInFlightError(
                f"A {self.kind.value} message is already being sent."
            )
        try:
            payload = self._strategy.validator(self._draft)
        except DraftRejectedError as exc:
            LOGGER.info(
                "submission.rejected",
                extra={
                    "event": "submission.rejected",
                    "kind": self.kind.value,
                    "reason": type(exc.reason).__name__,
                },
            )
            self._transition(Invalid(reason=exc.reason))
            return None

        loop = asyncio.get_running_loop()
        sending = Sending()
        # The task cannot start before the next loop turn, so it is tracked
        # before the observer hears about Sending.
        task = self._tasks.add(
            loop.create_task(
                self._attempt(payload), name=f"submission.{self.kind.value}"
            )
        )
        task.add_done_callback(lambda done: self._settle_cancelled(done, sending))
        self._transition(sending)
        return task

    async def submit(self) -> SubmissionState:
        """Send the current draft and wait for the attempt to resolve."""
        task = self.send()
        if task is None:
            return self._state
        return await task

    async def wait(self) -> None:
        """Wait for any in-flight attempt to resolve."""
        await self._tasks.await_all()

    async def _attempt(self, payload: P) -> SubmissionState:
        transport = self._strategy.transport
        try:
            if self._timeout_seconds is None:
                response = await transport.send(payload)
            else:
                response = await asyncio.wait_for(
                    transport.send(payload), timeout=self._timeout_seconds
                )
        except Exception as exc:  # noqa: BLE001 - transport errors become state.
            self._fail(self._describe_failure(exc))
        else:
            if response is None:
                self._fail(None)
            else:
                self._transition(Sent(response=response))
        return self._state

    def _settle_cancelled(
        self, task: asyncio.Task[SubmissionState], sending: Sending
    ) -> None:
        # Also covers a task cancelled before its first step, where _attempt
        # never runs.
        if task.cancelled() and self._state is sending:
            self._transition(ConnectionFailed(error="cancelled"))

    def _describe_failure(self, exc: Exception) -> str:
        if isinstance(exc, asyncio.TimeoutError) and self._timeout_seconds is not None:
            return f"timed out after {self._timeout_seconds:g}s"
        return f"{type(exc).__name__}: {exc}"

    def _fail(self, error: str | None) -> None:
        LOGGER.warning(
            "transport.failed",
            extra={
                "event": "transport.failed",
                "kind": self.kind.value,
                "error": error or "no response",
            },
        )
        self._transition(ConnectionFailed(error=error))

    def _transition(self, new_state: SubmissionState) -> None:
        old_state = self._state
        self._state = new_state
        LOGGER.debug(
            "submission.transition",
            extra={
                "event": "submission.transition",
                "kind": self.kind.value,
                "from_state": old_state.status.value,
                "to_state": new_state.status.value,
            },
        )
        if self._observer is not None:
            self._observer()


def text_sender(
    transport: Transport[Any, Any],
    config: dict[str, Any],
    draft: Draft | None = None,
    *,
    observer: Observer | None = None,
) -> MessageSender[Any, Any]:
    """Build a text message sender from loaded config."""
    return MessageSender.from_config(
        SendableKind.TEXT, transport, config, draft, observer=observer
    )


def image_sender(
    transport: Transport[Any, Any],
    config: dict[str, Any],
    draft: Draft | None = None,
    *,
    observer: Observer | None = None,
) -> MessageSender[Any, Any]:
    """Build an image message sender from loaded config."""
    return MessageSender.from_config(
        SendableKind.IMAGE, transport, config, draft, observer=observer
    )
