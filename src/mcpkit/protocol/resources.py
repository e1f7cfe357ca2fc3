from typing import Any

from pydantic import Field

from mcpkit.protocol.base import ProtocolModel
from mcpkit.protocol.dynamic import Dynamic
from mcpkit.protocol.schema import SchemaParameters


class ResourceMetadata(ProtocolModel):
    """
    Serializable description of a resource, without its handler.

    Resources are the GET-like entities of a server: files, database
    results, API responses, or any data identified by ``identifier``.
    """

    identifier: str
    name: str
    description: str | None = None

    mime_type: str = Field(default="text/plain", alias="mimeType")
    """
    Content type of the data the resource returns.
    """

    parameters: SchemaParameters = Field(default_factory=dict)
    """
    Optional schema for read arguments. Empty means reads are not validated.
    """


class ReadResourceRequestParams(ProtocolModel):
    identifier: str
    arguments: dict[str, Dynamic] | None = None

    def native_arguments(self) -> dict[str, Any]:
        if self.arguments is None:
            return {}
        return {key: value.to_native() for key, value in self.arguments.items()}


class ListResourcesResult(ProtocolModel):
    resources: list[ResourceMetadata]
