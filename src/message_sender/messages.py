"""Message kinds, drafts, validated payloads, and transport responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

# A path on disk or the raw encoded bytes of an image.
ImageRef = Union[str, Path, bytes]


class MessageKind(str, Enum):
    """Every kind of message that can appear in a conversation."""

    TEXT = "text"
    IMAGE = "image"
    OFFICIAL = "official"


class SendableKind(str, Enum):
    """Kinds a user can send. Official messages are receive-only."""

    TEXT = "text"
    IMAGE = "image"

    @property
    def message_kind(self) -> MessageKind:
        return MessageKind(self.value)


@dataclass(frozen=True)
class Draft:
    """In-progress content before validation.

    Both message kinds share one draft shape; text drafts ignore ``image``.
    """

    text: str | None = None
    image: ImageRef | None = None


@dataclass(frozen=True)
class TextPayload:
    """Text proven present and under the text length limit."""

    text: str


@dataclass(frozen=True)
class ImagePayload:
    """An image with an optional caption under the caption length limit."""

    image: ImageRef
    text: str | None = None


ValidatedPayload = Union[TextPayload, ImagePayload]


@dataclass(frozen=True)
class TextMessage:
    """Text message returned by a transport after a successful send."""

    text: str

    @property
    def kind(self) -> MessageKind:
        return MessageKind.TEXT


@dataclass(frozen=True)
class ImageMessage:
    """Image message returned by a transport after a successful send."""

    image: ImageRef
    text: str | None = None

    @property
    def kind(self) -> MessageKind:
        return MessageKind.IMAGE


ResponseMessage = Union[TextMessage, ImageMessage]
