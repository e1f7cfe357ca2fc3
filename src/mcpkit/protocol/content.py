import base64
import binascii
from typing import Any, Literal

from pydantic import field_serializer, field_validator

from mcpkit.protocol.base import ProtocolModel
from mcpkit.protocol.dynamic import Dynamic

Role = Literal["user", "assistant"]


class Annotations(ProtocolModel):
    """
    Hints about how to handle content in prompts and responses.

    Helps clients decide what to show users versus what to send directly
    to the LLM, and how important different pieces of content are.
    """

    audience: list[Role] | None = None
    """
    Who this content is intended for: "user", "assistant", or both.
    """

    priority: float | None = None
    """
    How essential this content is, from 0 (optional) to 1 (required).
    """

    @field_validator("audience", mode="before")
    @classmethod
    def validate_audience(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: float | None) -> float | None:
        if v is not None and not (0 <= v <= 1):
            raise ValueError("priority must be between 0 and 1")
        return v


class Message(ProtocolModel):
    """A message exchanged with the model: a role plus arbitrary content."""

    role: Role
    content: Dynamic
    annotations: Annotations | None = None


class Context(ProtocolModel):
    """Ordered conversation history handed to prompts and tools."""

    messages: list[Message] = []


class Image(ProtocolModel):
    """
    Binary image data with its format.

    The bytes travel base64-encoded on the wire.
    """

    data: bytes
    format: str
    """
    Image format like 'png' or 'jpeg'.
    """

    @field_validator("data", mode="before")
    @classmethod
    def decode_data(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                return base64.b64decode(v, validate=True)
            except binascii.Error as e:
                raise ValueError(f"data must be base64-encoded: {e}") from e
        return v

    @field_serializer("data")
    def encode_data(self, data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")
