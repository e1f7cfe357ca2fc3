from typing import Any, Literal

from pydantic import Field

from mcpkit.protocol.base import ProtocolModel
from mcpkit.protocol.dynamic import Dynamic
from mcpkit.protocol.schema import ObjectSchema, PrimitiveSchema, SchemaNode


class PromptArgument(ProtocolModel):
    """
    An argument a prompt accepts.
    """

    name: str
    description: str | None = None
    type: Literal["string", "int", "bool", "object"] = "string"
    required: bool = False

    def to_schema(self) -> SchemaNode:
        if self.type == "object":
            return ObjectSchema({})
        return PrimitiveSchema(self.type)


class PromptMetadata(ProtocolModel):
    """
    Serializable description of a reusable prompt, without its handler.
    """

    identifier: str
    name: str
    description: str | None = None
    arguments: list[PromptArgument] = Field(default_factory=list)

    def expected_for(self, arguments: dict[str, Any]) -> dict[str, SchemaNode]:
        """Schemas to validate ``arguments`` against.

        Required arguments are always checked. Optional ones are checked only
        when present, so omitting them is never an error.
        """
        return {
            argument.name: argument.to_schema()
            for argument in self.arguments
            if argument.required or argument.name in arguments
        }


class GetPromptRequestParams(ProtocolModel):
    name: str
    arguments: dict[str, Dynamic] | None = None

    def native_arguments(self) -> dict[str, Any]:
        if self.arguments is None:
            return {}
        return {key: value.to_native() for key, value in self.arguments.items()}


class ListPromptsResult(ProtocolModel):
    prompts: list[PromptMetadata]
