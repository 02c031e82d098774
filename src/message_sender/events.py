"""Fan-out of submission state changes to several subscribers.

A sender notifies exactly one observer. Install a bus as that observer when
more than one component needs to follow the same submission:

    bus = ObserverBus()
    bus.subscribe(status_bar.refresh)
    bus.subscribe(send_button.refresh)
    bus.attach(sender)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .sender import MessageSender
    from .state import SubmissionState

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateChanged:
    """A committed transition, delivered to bus subscribers."""

    sender: MessageSender[Any, Any]
    state: SubmissionState


class ObserverBus:
    """Synchronous publish/subscribe for one sender's transitions.

    Subscribers run in subscription order, inside the call that caused the
    transition. A subscriber that raises is logged and skipped so the rest
    still see the change.
    """

    def __init__(self) -> None:
        self._subscribers: list[Callable[[StateChanged], None]] = []

    def subscribe(self, handler: Callable[[StateChanged], None]) -> None:
        """Add ``handler``; it receives a :class:`StateChanged` per transition."""
        self._subscribers.append(handler)
        LOGGER.debug("observer.subscribed", extra={"event": "observer.subscribed"})

    def unsubscribe(self, handler: Callable[[StateChanged], None]) -> None:
        """Remove ``handler`` if it is subscribed."""
        try:
            self._subscribers.remove(handler)
        except ValueError:
            return
        LOGGER.debug("observer.unsubscribed", extra={"event": "observer.unsubscribed"})

    def attach(self, sender: MessageSender[Any, Any]) -> None:
        """Become ``sender``'s observer, replacing any previous one."""
        sender.set_observer(lambda: self.publish(sender))

    def publish(self, sender: MessageSender[Any, Any]) -> None:
        """Deliver ``sender``'s current state to every subscriber."""
        event = StateChanged(sender=sender, state=sender.state)
        for handler in list(self._subscribers):
            try:
                handler(event)
            except Exception:
                LOGGER.exception(
                    "observer.handler_failed",
                    extra={
                        "event": "observer.handler_failed",
                        "status": event.state.status.value,
                    },
                )

    def clear(self) -> None:
        """Drop all subscribers."""
        self._subscribers.clear()
