from typing import Any

from pydantic import Field

from mcpkit.protocol.base import ProtocolModel
from mcpkit.protocol.dynamic import Dynamic
from mcpkit.protocol.schema import ObjectSchema, SchemaParameters


class ToolMetadata(ProtocolModel):
    """
    Serializable description of a tool, without its handler.

    Tools are the POST-like entities of a server: they perform actions with
    the arguments a client sends.
    """

    identifier: str
    """
    Unique key the tool is registered and called under.
    """

    name: str
    """
    Human-readable name.
    """

    description: str | None = None

    parameters: SchemaParameters = Field(default_factory=dict)
    """
    Schema for every argument the tool requires. Definitions are parsed
    strictly, so a malformed schema fails here rather than at call time.
    """

    def to_serializable(self) -> "SerializableTool":
        return SerializableTool(
            name=self.identifier,
            description=self.description,
            input_schema=ObjectSchema(self.parameters).to_definition(),
        )


class SerializableTool(ProtocolModel):
    """Tool entry as advertised in a tool listing."""

    name: str
    description: str | None = None
    input_schema: dict[str, Dynamic] = Field(default_factory=dict, alias="inputSchema")


class ListToolsResult(ProtocolModel):
    tools: list[SerializableTool]


class CallToolRequestParams(ProtocolModel):
    name: str
    arguments: dict[str, Dynamic] | None = None

    def native_arguments(self) -> dict[str, Any]:
        if self.arguments is None:
            return {}
        return {key: value.to_native() for key, value in self.arguments.items()}


class CallToolResult(ProtocolModel):
    """
    Result of a tool call.

    Execution failures are reported with ``is_error=True`` and a text
    content block, so the model can see what went wrong and recover.
    """

    content: list[Dynamic]
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def error(cls, message: str) -> "CallToolResult":
        return cls(content=[{"type": "text", "text": message}], is_error=True)
