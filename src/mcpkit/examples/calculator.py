import asyncio
import logging
import sys

from pydantic import ValidationError

from mcpkit.protocol.messages import RequestMessage, ResponseMessage
from mcpkit.protocol.prompts import PromptArgument, PromptMetadata
from mcpkit.protocol.resources import ResourceMetadata
from mcpkit.protocol.tools import ToolMetadata
from mcpkit.server.server import MCPServer, ServerConfig
from mcpkit.shared.errors import DecodingError, EncodingError


def build_server() -> MCPServer:
    server = MCPServer(ServerConfig(name="calculator"))

    async def calculate_handler(arguments: dict) -> str:
        logging.info(f"Arguments: {arguments}")
        a = arguments["a"]
        b = arguments["b"]
        return f"The sum of {a} and {b} is {a + b}"

    server.register_tool(
        ToolMetadata(
            identifier="calculate",
            name="Calculate",
            description="Calculate the sum of two numbers",
            parameters={"a": "int", "b": "int"},
        ),
        calculate_handler,
    )

    async def history_handler(arguments: dict) -> list:
        return [{"a": 2, "b": 3, "sum": 5}]

    server.register_resource(
        ResourceMetadata(
            identifier="history",
            name="History",
            description="Previous calculations",
            mime_type="application/json",
        ),
        history_handler,
    )

    async def explain_handler(arguments: dict) -> dict:
        expression = arguments["expression"]
        text = f"Explain step by step how to evaluate {expression}."
        if arguments.get("brief"):
            text = f"Briefly explain {expression}."
        return {"role": "user", "content": text}

    server.register_prompt(
        PromptMetadata(
            identifier="explain",
            name="Explain",
            description="Ask for an explanation of an expression",
            arguments=[
                PromptArgument(name="expression", required=True),
                PromptArgument(name="brief", type="bool"),
            ],
        ),
        explain_handler,
    )
    return server


async def respond(server: MCPServer, line: bytes) -> bytes | None:
    """Answer one request line. Returns None for input that is not a request."""
    try:
        message = RequestMessage.from_json(line)
    except (DecodingError, ValidationError) as e:
        logging.warning(f"Dropping malformed request: {e}")
        return None

    response = await server.handle(message)
    try:
        return response.to_json()
    except EncodingError as e:
        logging.error(f"Failed to encode response {message.id}: {e}")
        return ResponseMessage(
            id=message.id, error=f"Failed to encode response: {e.message}"
        ).to_json()


async def main():
    # One JSON request message per stdin line, one response per stdout line
    server = build_server()
    loop = asyncio.get_running_loop()
    while line := await loop.run_in_executor(None, sys.stdin.buffer.readline):
        if not line.strip():
            continue
        response = await respond(server, line)
        if response is None:
            continue
        sys.stdout.buffer.write(response + b"\n")
        sys.stdout.buffer.flush()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    asyncio.run(main())
