"""Result envelope returned by every MCP tool handler.

The envelope is uniform across success, validation failure and upstream
failure, so a calling model always receives parseable content.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TextContentBlock(BaseModel):
    """A single text content block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolResultEnvelope(BaseModel):
    """Uniform tool result: ``{isError, content}``.

    Serialize with ``model_dump(by_alias=True)`` for the wire shape.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_error: bool = Field(default=False, alias="isError")
    content: list[TextContentBlock] = Field(default_factory=list)

    @classmethod
    def success(cls, text: str) -> ToolResultEnvelope:
        return cls(is_error=False, content=[TextContentBlock(text=text)])

    @classmethod
    def failure(cls, text: str) -> ToolResultEnvelope:
        return cls(is_error=True, content=[TextContentBlock(text=text)])

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)
