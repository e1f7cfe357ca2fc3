from collections.abc import Mapping
from typing import Any

from mcpkit.protocol.dynamic import DynamicValue
from mcpkit.protocol.schema import SchemaLike
from mcpkit.protocol.tools import (
    CallToolRequestParams,
    CallToolResult,
    ListToolsResult,
    ToolMetadata,
)
from mcpkit.server.managers.registry import Registry
from mcpkit.shared.errors import ArgumentValidationError, NotFoundError


class ToolManager(Registry[ToolMetadata]):
    """Registry of tools, the action-performing entities of a server."""

    kind = "Tool"

    def expected_parameters(
        self, metadata: ToolMetadata, arguments: Mapping[str, Any]
    ) -> Mapping[str, SchemaLike]:
        return metadata.parameters

    async def execute(
        self, identifier: str, arguments: Mapping[str, Any] | None = None
    ) -> DynamicValue:
        """Run a tool and return its result as a dynamic value.

        Raises:
            NotFoundError: If the tool is not registered.
            ArgumentValidationError: If the arguments do not match the tool's
                parameters. The handler is not invoked.
            UnsupportedValueError: If the handler returns something that has
                no dynamic value representation.
        """
        return DynamicValue.from_native(await self._invoke(identifier, arguments))

    def list_result(self) -> ListToolsResult:
        return ListToolsResult(tools=[tool.to_serializable() for tool in self.list()])

    async def call(self, params: CallToolRequestParams) -> CallToolResult:
        """Execute a tool call request.

        Validation and execution failures return CallToolResult with
        is_error=True so the LLM can see what went wrong and potentially
        recover. Unknown tools raise NotFoundError (a KeyError) for the caller
        to convert to a protocol error.

        Handlers may return a CallToolResult themselves. A string becomes a
        single text block and any other value a single content item.

        Raises:
            NotFoundError: If the requested tool is not registered.
        """
        try:
            result = await self._invoke(params.name, params.native_arguments())
            if isinstance(result, CallToolResult):
                return result
            if isinstance(result, str):
                return CallToolResult(content=[{"type": "text", "text": result}])
            return CallToolResult(content=[result])
        except NotFoundError:
            # Re-raise for the caller to convert to a protocol error
            raise
        except ArgumentValidationError as e:
            return CallToolResult.error(
                "Invalid arguments: " + "; ".join(e.result.errors)
            )
        except Exception as e:
            # Tool execution failed -> domain error for LLM to see
            self.logger.exception(f"Tool {params.name} failed")
            return CallToolResult.error(f"Tool execution failed: {str(e)}")
