"""Per-kind draft validators and the rejection reasons they report.

Validators are pure callables: ``validator(draft)`` returns a payload or
raises :class:`~message_sender.exceptions.DraftRejectedError` carrying a
value-comparable reason. Use :func:`check` to get the reason back as data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar, Union

from .exceptions import DraftRejectedError
from .messages import Draft, ImagePayload, TextPayload

TEXT_MAX_LENGTH = 300
IMAGE_CAPTION_MAX_LENGTH = 80

P = TypeVar("P")


@dataclass(frozen=True)
class MissingText:
    """A text message was submitted without any text."""

    def describe(self) -> str:
        return "Text is required."


@dataclass(frozen=True)
class MissingImage:
    """An image message was submitted without an image."""

    def describe(self) -> str:
        return "Image is required."


@dataclass(frozen=True)
class TextTooLong:
    """Text reached the length limit for its kind.

    ``count`` is the character count of the rejected text; ``limit`` is the
    first length that is not accepted.
    """

    count: int
    limit: int

    def describe(self) -> str:
        return f"Text is too long ({self.count} characters, must be under {self.limit})."


RejectionReason = Union[MissingText, MissingImage, TextTooLong]

Validator = Callable[[Draft], P]


@dataclass(frozen=True)
class TextValidator:
    """Accept drafts whose text is present and shorter than ``max_length``."""

    max_length: int = TEXT_MAX_LENGTH

    def __call__(self, draft: Draft) -> TextPayload:
        if draft.text is None:
            raise DraftRejectedError(MissingText())
        count = len(draft.text)
        if count >= self.max_length:
            raise DraftRejectedError(TextTooLong(count=count, limit=self.max_length))
        return TextPayload(text=draft.text)


@dataclass(frozen=True)
class ImageValidator:
    """Accept drafts with an image and an optional short caption.

    The image is checked before the caption, so a draft that has neither an
    image nor a valid caption is reported as :class:`MissingImage`.
    """

    max_caption_length: int = IMAGE_CAPTION_MAX_LENGTH

    def __call__(self, draft: Draft) -> ImagePayload:
        if draft.image is None:
            raise DraftRejectedError(MissingImage())
        if draft.text is not None:
            count = len(draft.text)
            if count >= self.max_caption_length:
                raise DraftRejectedError(
                    TextTooLong(count=count, limit=self.max_caption_length)
                )
        return ImagePayload(image=draft.image, text=draft.text)


def check(validator: Validator[P], draft: Draft) -> P | RejectionReason:
    """Run ``validator`` and return the rejection reason instead of raising."""
    try:
        return validator(draft)
    except DraftRejectedError as exc:
        return exc.reason
