"""Tests for send strategy construction."""

from __future__ import annotations

import unittest

from message_sender.exceptions import InvariantViolationError
from message_sender.messages import Draft, MessageKind, SendableKind, TextPayload
from message_sender.strategy import (
    SendStrategy,
    image_strategy,
    strategy_from_config,
    text_strategy,
)
from message_sender.validation import ImageValidator, TextValidator


class NullTransport:
    """Transport double that never delivers."""

    async def send(self, payload: object) -> None:
        return None


class StrategyTests(unittest.TestCase):
    """Strategies exist only for sendable kinds."""

    def test_factories_bind_matching_validators(self) -> None:
        transport = NullTransport()
        text = text_strategy(transport)
        image = image_strategy(transport, max_caption_length=40)
        self.assertIs(text.kind, SendableKind.TEXT)
        self.assertEqual(text.validator, TextValidator(max_length=300))
        self.assertIs(text.transport, transport)
        self.assertIs(image.kind, SendableKind.IMAGE)
        self.assertEqual(image.validator, ImageValidator(max_caption_length=40))

    def test_official_kind_is_not_sendable(self) -> None:
        self.assertNotIn("OFFICIAL", SendableKind.__members__)
        with self.assertRaises(InvariantViolationError):
            SendStrategy(
                kind=MessageKind.OFFICIAL,  # type: ignore[arg-type]
                validator=TextValidator(),
                transport=NullTransport(),
            )

    def test_message_kind_alone_is_rejected(self) -> None:
        with self.assertRaises(InvariantViolationError):
            SendStrategy(
                kind=MessageKind.TEXT,  # type: ignore[arg-type]
                validator=TextValidator(),
                transport=NullTransport(),
            )

    def test_sendable_kinds_map_to_message_kinds(self) -> None:
        self.assertIs(SendableKind.TEXT.message_kind, MessageKind.TEXT)
        self.assertIs(SendableKind.IMAGE.message_kind, MessageKind.IMAGE)

    def test_strategy_from_config(self) -> None:
        config = {"validation": {"text_max_length": 5, "image_caption_max_length": 3}}
        text = strategy_from_config(SendableKind.TEXT, NullTransport(), config)
        image = strategy_from_config(SendableKind.IMAGE, NullTransport(), config)
        self.assertEqual(text.validator, TextValidator(max_length=5))
        self.assertEqual(image.validator, ImageValidator(max_caption_length=3))
        self.assertEqual(text.validator(Draft(text="abcd")), TextPayload(text="abcd"))

    def test_strategy_from_config_rejects_official(self) -> None:
        with self.assertRaises(InvariantViolationError):
            strategy_from_config(
                MessageKind.OFFICIAL, NullTransport(), {}  # type: ignore[arg-type]
            )

    def test_strategy_is_immutable(self) -> None:
        strategy = text_strategy(NullTransport())
        with self.assertRaises(AttributeError):
            strategy.kind = SendableKind.IMAGE  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
