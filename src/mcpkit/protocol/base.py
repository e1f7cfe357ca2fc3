from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from mcpkit.protocol import codec
from mcpkit.protocol.dynamic import Dynamic, Null, Object

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolModel(BaseModel):
    """Base class for every structure exchanged over the protocol.

    Fields are snake_case in Python and camelCase on the wire. Payload fields
    typed as ``Dynamic`` hold a DynamicValue in memory and plain data when
    dumped. JSON I/O goes through the codec, so models fail to serialize
    exactly where the codec does.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    def to_protocol(self) -> dict[str, Any]:
        """Dump to a wire-shaped dict, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_protocol(cls, data: dict[str, Any]) -> Self:
        return cls.model_validate(data)

    def to_json(self) -> bytes:
        """Encode with the codec.

        Raises:
            EncodingError: If a payload holds a NaN or infinite float.
        """
        return codec.encode(self.to_protocol())

    @classmethod
    def from_json(cls, data: bytes | str) -> Self:
        """Decode with the codec and validate into the model.

        Raises:
            DecodingError: If the input is not a single well-formed JSON value.
            pydantic.ValidationError: If the JSON does not match the model.
        """
        return cls.model_validate(codec.decode(data).to_native())


class Error(ProtocolModel):
    """Error details carried by a failed response."""

    code: int
    message: str
    data: dict[str, Dynamic] | None = None


class Request(ProtocolModel):
    """A method call with an opaque payload."""

    id: str | int
    method: str
    params: Dynamic = Field(default_factory=Object)

    def params_as_dict(self) -> dict[str, Any]:
        """Native parameter mapping, empty when params is not an object."""
        native = self.params.to_native()
        return native if isinstance(native, dict) else {}


class Response(ProtocolModel):
    """The outcome of a Request: either a result or an error."""

    id: str | int
    result: Dynamic | None = None
    error: Error | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, request_id: str | int, result: Any) -> Self:
        # A None result is still a result, so it is sent as JSON null
        return cls(id=request_id, result=Null() if result is None else result)

    @classmethod
    def failure(
        cls,
        request_id: str | int,
        code: int,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> Self:
        return cls(id=request_id, error=Error(code=code, message=message, data=data))
