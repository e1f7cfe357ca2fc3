from collections.abc import Mapping
from typing import Any

from mcpkit.protocol.dynamic import DynamicValue
from mcpkit.protocol.resources import ResourceMetadata
from mcpkit.protocol.schema import SchemaLike
from mcpkit.server.managers.registry import Registry


class ResourceManager(Registry[ResourceMetadata]):
    """Registry of resources, the data-returning entities of a server.

    Resources without declared parameters accept any arguments.
    """

    kind = "Resource"

    def expected_parameters(
        self, metadata: ResourceMetadata, arguments: Mapping[str, Any]
    ) -> Mapping[str, SchemaLike]:
        return metadata.parameters

    async def read(
        self, identifier: str, arguments: Mapping[str, Any] | None = None
    ) -> DynamicValue:
        """Read a resource and return its data as a dynamic value.

        Raises:
            NotFoundError: If the resource is not registered.
            ArgumentValidationError: If the arguments do not match the
                resource's parameters.
        """
        return DynamicValue.from_native(await self._invoke(identifier, arguments))
