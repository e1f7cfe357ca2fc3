"""Envelopes for identifier-based dispatch.

A ``RequestMessage`` names the kind of entity (``tool``, ``resource`` or
``prompt``) and its identifier; the server answers with a
``ResponseMessage`` carrying either a result or an error string.
"""

from typing import Any, Literal

from mcpkit.protocol.base import ProtocolModel
from mcpkit.protocol.dynamic import Dynamic

EntityType = Literal["tool", "resource", "prompt"]


class RequestMessage(ProtocolModel):
    id: str
    type: str
    """
    Entity kind to route to. Unknown kinds are answered with an error
    response rather than rejected at parse time.
    """

    identifier: str
    params: dict[str, Dynamic] | None = None

    def arguments(self) -> dict[str, Any]:
        """Native argument mapping handed to validation and handlers."""
        if self.params is None:
            return {}
        return {name: value.to_native() for name, value in self.params.items()}


class ResponseMessage(ProtocolModel):
    id: str
    result: Dynamic | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

