"""Send strategies: the immutable (kind, validator, transport) binding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .exceptions import InvariantViolationError
from .messages import (
    ImageMessage,
    ImagePayload,
    SendableKind,
    TextMessage,
    TextPayload,
)
from .transport import Transport
from .validation import (
    IMAGE_CAPTION_MAX_LENGTH,
    TEXT_MAX_LENGTH,
    ImageValidator,
    TextValidator,
    Validator,
)

P = TypeVar("P")
R = TypeVar("R")


@dataclass(frozen=True)
class SendStrategy(Generic[P, R]):
    """Pair a sendable kind with the validator and transport for that kind.

    Prefer :func:`text_strategy` and :func:`image_strategy`, which tie the
    validator's payload type to the transport's input type.
    """

    kind: SendableKind
    validator: Validator[P]
    transport: Transport[P, R]

    def __post_init__(self) -> None:
        if not isinstance(self.kind, SendableKind):
            raise InvariantViolationError(
                f"{self.kind!r} is not a sendable message kind."
            )


def text_strategy(
    transport: Transport[TextPayload, TextMessage],
    *,
    max_length: int = TEXT_MAX_LENGTH,
) -> SendStrategy[TextPayload, TextMessage]:
    """Build the strategy for plain text messages."""
    return SendStrategy(
        kind=SendableKind.TEXT,
        validator=TextValidator(max_length=max_length),
        transport=transport,
    )


def image_strategy(
    transport: Transport[ImagePayload, ImageMessage],
    *,
    max_caption_length: int = IMAGE_CAPTION_MAX_LENGTH,
) -> SendStrategy[ImagePayload, ImageMessage]:
    """Build the strategy for image messages with an optional caption."""
    return SendStrategy(
        kind=SendableKind.IMAGE,
        validator=ImageValidator(max_caption_length=max_caption_length),
        transport=transport,
    )


def strategy_from_config(
    kind: SendableKind,
    transport: Transport[Any, Any],
    config: dict[str, Any],
) -> SendStrategy[Any, Any]:
    """Build the strategy for ``kind`` using limits from the [validation] section."""
    validation_cfg = config.get("validation", {})
    if kind is SendableKind.TEXT:
        return text_strategy(
            transport,
            max_length=int(validation_cfg.get("text_max_length", TEXT_MAX_LENGTH)),
        )
    if kind is SendableKind.IMAGE:
        return image_strategy(
            transport,
            max_caption_length=int(
                validation_cfg.get(
                    "image_caption_max_length", IMAGE_CAPTION_MAX_LENGTH
                )
            ),
        )
    raise InvariantViolationError(f"{kind!r} is not a sendable message kind.")
