"""Top-level package for message-sender."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import load_config
    from .events import ObserverBus, StateChanged
    from .exceptions import (
        ConfigValidationError,
        DraftRejectedError,
        InvariantViolationError,
        MessageSenderError,
        SubmissionInFlightError,
    )
    from .logging_utils import configure_logging
    from .messages import (
        Draft,
        ImageMessage,
        ImagePayload,
        MessageKind,
        ResponseMessage,
        SendableKind,
        TextMessage,
        TextPayload,
        ValidatedPayload,
    )
    from .sender import MessageSender, image_sender, text_sender
    from .state import (
        ConnectionFailed,
        Invalid,
        Ready,
        Sending,
        Sent,
        SubmissionState,
        SubmissionStatus,
    )
    from .strategy import SendStrategy, image_strategy, text_strategy
    from .transport import BlockingTransport, CallbackTransport, Transport
    from .validation import MissingImage, MissingText, TextTooLong

_EXPORTS: dict[str, str] = {
    "load_config": ".config",
    "ObserverBus": ".events",
    "StateChanged": ".events",
    "ConfigValidationError": ".exceptions",
    "DraftRejectedError": ".exceptions",
    "InvariantViolationError": ".exceptions",
    "MessageSenderError": ".exceptions",
    "SubmissionInFlightError": ".exceptions",
    "configure_logging": ".logging_utils",
    "Draft": ".messages",
    "ImageMessage": ".messages",
    "ImagePayload": ".messages",
    "MessageKind": ".messages",
    "ResponseMessage": ".messages",
    "SendableKind": ".messages",
    "TextMessage": ".messages",
    "TextPayload": ".messages",
    "ValidatedPayload": ".messages",
    "MessageSender": ".sender",
    "image_sender": ".sender",
    "text_sender": ".sender",
    "ConnectionFailed": ".state",
    "Invalid": ".state",
    "Ready": ".state",
    "Sending": ".state",
    "Sent": ".state",
    "SubmissionState": ".state",
    "SubmissionStatus": ".state",
    "SendStrategy": ".strategy",
    "image_strategy": ".strategy",
    "text_strategy": ".strategy",
    "BlockingTransport": ".transport",
    "CallbackTransport": ".transport",
    "Transport": ".transport",
    "MissingImage": ".validation",
    "MissingText": ".validation",
    "TextTooLong": ".validation",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> Any:
    """Lazily import symbols so config and logging dependencies load on first use."""
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return getattr(import_module(module_name, __name__), name)
