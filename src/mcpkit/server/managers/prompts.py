from collections.abc import Mapping
from typing import Any

from mcpkit.protocol.dynamic import DynamicValue
from mcpkit.protocol.prompts import PromptMetadata
from mcpkit.protocol.schema import SchemaLike
from mcpkit.server.managers.registry import Registry


class PromptManager(Registry[PromptMetadata]):
    kind = "Prompt"

    def expected_parameters(
        self, metadata: PromptMetadata, arguments: Mapping[str, Any]
    ) -> Mapping[str, SchemaLike]:
        # Optional arguments are only type-checked when supplied
        return metadata.expected_for(arguments)

    async def render(
        self, identifier: str, arguments: Mapping[str, Any] | None = None
    ) -> DynamicValue:
        """Render a prompt with ``arguments``.

        Raises:
            NotFoundError: If the prompt is not registered.
            ArgumentValidationError: If a required argument is missing or any
                supplied argument has the wrong type.
        """
        return DynamicValue.from_native(await self._invoke(identifier, arguments))
