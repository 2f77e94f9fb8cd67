"""Message carried by a WidError: display text or a localization key."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict


class MessageVariant(str, Enum):
    """Wire tags of the two message variants."""

    DEFAULT = "Default"
    I18N = "I18n"


class Message(BaseModel):
    """Tagged message value.

    ``DEFAULT`` holds ready-to-display text. ``I18N`` holds an opaque key that
    an external localization resolver turns into text; nothing in this package
    resolves it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    variant: MessageVariant = MessageVariant.DEFAULT
    text: str = ""

    @classmethod
    def default(cls, text: str = "") -> "Message":
        """Build ready-to-display text."""
        return cls(variant=MessageVariant.DEFAULT, text=text)

    @classmethod
    def i18n(cls, key: str) -> "Message":
        """Build a message that needs a localization lookup for ``key``."""
        return cls(variant=MessageVariant.I18N, text=key)

    @property
    def is_default(self) -> bool:
        """True for display text."""
        return self.variant is MessageVariant.DEFAULT

    @property
    def is_i18n(self) -> bool:
        """True for a localization key."""
        return self.variant is MessageVariant.I18N

    def to_wire(self) -> dict[str, str]:
        """Return the tagged wire form, e.g. ``{"Default": "..."}``."""
        return {self.variant.value: self.text}

    @classmethod
    def from_wire(cls, value: Mapping[str, Any]) -> "Message":
        """Parse the tagged wire form.

        Raises ``ValueError`` unless ``value`` holds exactly one known tag
        mapped to a string.
        """
        if len(value) != 1:
            raise ValueError("message must hold exactly one of 'Default' or 'I18n'")
        tag, text = next(iter(value.items()))
        try:
            variant = MessageVariant(tag)
        except ValueError:
            raise ValueError(f"unknown message tag: {tag!r}") from None
        if not isinstance(text, str):
            raise ValueError(f"message {tag} payload must be a string")
        return cls(variant=variant, text=text)

    def __str__(self) -> str:
        return f"{self.variant.value}({self.text})"


def as_message(value: "Message | str") -> Message:
    """Coerce plain text into a default message."""
    if isinstance(value, Message):
        return value
    return Message.default(value)
