"""Server façade that owns the tool, resource and prompt registries.

Two dispatch surfaces are offered. ``handle`` answers identifier-based
``RequestMessage``s with a ``ResponseMessage`` carrying a result or an error
string. ``handle_request`` answers method-based ``Request``s with a
``Response`` carrying JSON-RPC error codes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from mcpkit.protocol.base import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    Request,
    Response,
)
from mcpkit.protocol.messages import RequestMessage, ResponseMessage
from mcpkit.protocol.prompts import (
    GetPromptRequestParams,
    ListPromptsResult,
    PromptMetadata,
)
from mcpkit.protocol.resources import (
    ListResourcesResult,
    ReadResourceRequestParams,
    ResourceMetadata,
)
from mcpkit.protocol.tools import CallToolRequestParams, ToolMetadata
from mcpkit.server.managers.prompts import PromptManager
from mcpkit.server.managers.registry import DuplicatePolicy, Handler, Registry
from mcpkit.server.managers.resources import ResourceManager
from mcpkit.server.managers.tools import ToolManager
from mcpkit.shared.errors import ArgumentValidationError, NotFoundError

Params = TypeVar("Params", bound=BaseModel)


@dataclass
class ServerConfig:
    name: str
    version: str = "0.1.0"
    validate_arguments: bool = True
    warn_on_duplicates: bool = True
    duplicate_policy: DuplicatePolicy = "keep"


class MCPServer:
    def __init__(self, config: ServerConfig, logger: logging.Logger | None = None):
        self.config = config
        self.logger = logger or logging.getLogger("mcpkit.server")

        settings = {
            "validate_arguments": config.validate_arguments,
            "warn_on_duplicates": config.warn_on_duplicates,
            "duplicate_policy": config.duplicate_policy,
        }
        self.tools = ToolManager(**settings)
        self.resources = ResourceManager(**settings)
        self.prompts = PromptManager(**settings)

    @property
    def name(self) -> str:
        return self.config.name

    # ================================
    # Registration
    # ================================

    def register_tool(self, metadata: ToolMetadata, handler: Handler) -> ToolMetadata:
        return self.tools.register(metadata, handler)

    def register_resource(
        self, metadata: ResourceMetadata, handler: Handler
    ) -> ResourceMetadata:
        return self.resources.register(metadata, handler)

    def register_prompt(
        self, metadata: PromptMetadata, handler: Handler
    ) -> PromptMetadata:
        return self.prompts.register(metadata, handler)

    @property
    def tool_metadatas(self) -> list[ToolMetadata]:
        return self.tools.list()

    @property
    def resource_metadatas(self) -> list[ResourceMetadata]:
        return self.resources.list()

    @property
    def prompt_metadatas(self) -> list[PromptMetadata]:
        return self.prompts.list()

    def handler_for_tool(self, identifier: str) -> Handler | None:
        return self.tools.get_handler(identifier)

    def handler_for_resource(self, identifier: str) -> Handler | None:
        return self.resources.get_handler(identifier)

    def handler_for_prompt(self, identifier: str) -> Handler | None:
        return self.prompts.get_handler(identifier)

    # ================================
    # Identifier dispatch
    # ================================

    async def handle(self, message: RequestMessage) -> ResponseMessage:
        """Route a request message to the registry named by its ``type``.

        Never raises for lookup, validation or handler failures: they are
        reported in the response's ``error`` field.
        """
        registries = self._get_registries()
        if message.type not in registries:
            return ResponseMessage(id=message.id, error="Unknown request type")

        registry, execute = registries[message.type]
        try:
            result = await execute(message.identifier, message.arguments())
        except NotFoundError as e:
            return ResponseMessage(id=message.id, error=e.message)
        except ArgumentValidationError as e:
            return ResponseMessage(id=message.id, error="; ".join(e.result.errors))
        except Exception as e:
            self.logger.exception(
                f"{registry.kind} handler failed: {message.identifier}"
            )
            return ResponseMessage(
                id=message.id, error=f"{registry.kind} handler failed: {str(e)}"
            )
        return ResponseMessage(id=message.id, result=result)

    async def handle_json(self, data: bytes | str) -> bytes:
        """Decode a request message, handle it and encode the response.

        Raises:
            DecodingError: If ``data`` is not a single well-formed JSON value.
            pydantic.ValidationError: If the JSON is not a request message.
            EncodingError: If the result holds a NaN or infinite float.
        """
        message = RequestMessage.from_json(data)
        response = await self.handle(message)
        return response.to_json()

    def _get_registries(
        self,
    ) -> dict[str, tuple[Registry, Callable[..., Awaitable[Any]]]]:
        return {
            "tool": (self.tools, self.tools.execute),
            "resource": (self.resources, self.resources.read),
            "prompt": (self.prompts, self.prompts.render),
        }

    # ================================
    # Method dispatch
    # ================================

    async def handle_request(self, request: Request) -> Response:
        """Route a request to the handler for its method.

        Returns an error response if there is no handler for the method.
        """
        handlers = self._get_request_handlers()
        if request.method not in handlers:
            return Response.failure(
                request.id,
                METHOD_NOT_FOUND,
                f"Method not supported: {request.method}",
            )
        return await handlers[request.method](request)

    def _get_request_handlers(self):
        """Maps request methods to their corresponding handler functions."""
        return {
            "tools/list": self._handle_list_tools,
            "tools/call": self._handle_call_tool,
            "resources/list": self._handle_list_resources,
            "resources/read": self._handle_read_resource,
            "prompts/list": self._handle_list_prompts,
            "prompts/get": self._handle_get_prompt,
        }

    async def _handle_list_tools(self, request: Request) -> Response:
        return Response.success(request.id, self.tools.list_result())

    async def _handle_call_tool(self, request: Request) -> Response:
        """Execute a tool call.

        Validation and handler failures are domain errors reported inside a
        successful response (``isError``). Only unknown tools and malformed
        params become protocol errors.
        """
        params = self._parse_params(request, CallToolRequestParams)
        if isinstance(params, Response):
            return params
        try:
            result = await self.tools.call(params)
        except NotFoundError:
            return Response.failure(
                request.id, METHOD_NOT_FOUND, f"Unknown tool: {params.name}"
            )
        return Response.success(request.id, result)

    async def _handle_list_resources(self, request: Request) -> Response:
        return Response.success(
            request.id, ListResourcesResult(resources=self.resources.list())
        )

    async def _handle_read_resource(self, request: Request) -> Response:
        params = self._parse_params(request, ReadResourceRequestParams)
        if isinstance(params, Response):
            return params
        return await self._execute(
            request,
            self.resources,
            self.resources.read,
            params.identifier,
            params.native_arguments(),
        )

    async def _handle_list_prompts(self, request: Request) -> Response:
        return Response.success(
            request.id, ListPromptsResult(prompts=self.prompts.list())
        )

    async def _handle_get_prompt(self, request: Request) -> Response:
        params = self._parse_params(request, GetPromptRequestParams)
        if isinstance(params, Response):
            return params
        return await self._execute(
            request,
            self.prompts,
            self.prompts.render,
            params.name,
            params.native_arguments(),
        )

    async def _execute(
        self,
        request: Request,
        registry: Registry,
        execute: Callable[..., Awaitable[Any]],
        identifier: str,
        arguments: dict[str, Any],
    ) -> Response:
        try:
            result = await execute(identifier, arguments)
        except NotFoundError:
            return Response.failure(
                request.id,
                METHOD_NOT_FOUND,
                f"Unknown {registry.kind.lower()}: {identifier}",
            )
        except ArgumentValidationError as e:
            return Response.failure(
                request.id,
                INVALID_PARAMS,
                "; ".join(e.result.errors),
                data=e.result.to_protocol(),
            )
        except Exception as e:
            self.logger.exception(f"{registry.kind} handler failed: {identifier}")
            return Response.failure(
                request.id,
                INTERNAL_ERROR,
                f"{registry.kind} handler failed: {str(e)}",
            )
        return Response.success(request.id, result)

    def _parse_params(
        self, request: Request, model: type[Params]
    ) -> Params | Response:
        try:
            return model.model_validate(request.params_as_dict())
        except ValidationError as e:
            errors = [
                {
                    "path": ".".join(str(part) for part in error["loc"]),
                    "message": error["msg"],
                }
                for error in e.errors()
            ]
            return Response.failure(
                request.id, INVALID_PARAMS, "Invalid params", data={"errors": errors}
            )
