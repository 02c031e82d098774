"""Submission lifecycle states.

Each state is an immutable value; a sender replaces its state wholesale on
every transition, so fields of one state are never visible while another
state is active.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from .exceptions import DraftRejectedError
from .messages import Draft, ResponseMessage
from .validation import RejectionReason, Validator


class SubmissionStatus(str, Enum):
    """Tag identifying the active submission state."""

    READY = "READY"
    INVALID = "INVALID"
    SENDING = "SENDING"
    SENT = "SENT"
    CONNECTION_FAILED = "CONNECTION_FAILED"


@dataclass(frozen=True)
class Ready:
    """The draft is valid and nothing has been sent since it last changed."""

    status: ClassVar[SubmissionStatus] = SubmissionStatus.READY


@dataclass(frozen=True)
class Invalid:
    """The draft fails validation for ``reason``."""

    reason: RejectionReason
    status: ClassVar[SubmissionStatus] = SubmissionStatus.INVALID


@dataclass(frozen=True)
class Sending:
    """A transport call is in flight."""

    status: ClassVar[SubmissionStatus] = SubmissionStatus.SENDING


@dataclass(frozen=True)
class Sent:
    """The transport delivered the message and returned ``response``."""

    response: ResponseMessage
    status: ClassVar[SubmissionStatus] = SubmissionStatus.SENT


@dataclass(frozen=True)
class ConnectionFailed:
    """The transport reported failure. ``error`` is set when it raised or timed out."""

    error: str | None = None
    status: ClassVar[SubmissionStatus] = SubmissionStatus.CONNECTION_FAILED


SubmissionState = Union[Ready, Invalid, Sending, Sent, ConnectionFailed]


def evaluate(validator: Validator[object], draft: Draft) -> Ready | Invalid:
    """Return the resting state for ``draft``: Ready or Invalid."""
    try:
        validator(draft)
    except DraftRejectedError as exc:
        return Invalid(reason=exc.reason)
    return Ready()
