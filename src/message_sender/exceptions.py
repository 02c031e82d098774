"""Domain exception hierarchy for the message submission pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validation import RejectionReason


class MessageSenderError(RuntimeError):
    """Base class for all domain-level submission errors."""


class DraftRejectedError(MessageSenderError, ValueError):
    """Raised by a validator when a draft breaks its kind's rules."""

    def __init__(self, reason: RejectionReason) -> None:
        super().__init__(reason.describe())
        self.reason = reason


class SubmissionInFlightError(MessageSenderError):
    """Raised when send() is called while a previous attempt is still sending."""


class InvariantViolationError(MessageSenderError):
    """Raised when a receive-only message kind is used as a send target."""


class ConfigValidationError(MessageSenderError):
    """Raised when configuration cannot be validated safely."""
