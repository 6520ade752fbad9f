import asyncio
import logging

from tools.handlers import BashCommandHandler, ComputerUseHandler
from tools.output import TextPayload
from tools.registry import ToolRegistryBuilder, build_default_registry
from tools.spec import ToolSpec


class EchoHandler:
    async def handle(self, invocation):
        return TextPayload("echo")


def test_default_registry_maps_both_tools():
    registry = build_default_registry()
    assert [spec.name for spec in registry.specs()] == ["computer_use", "bash_command"]
    assert isinstance(registry.get_handler("computer_use"), ComputerUseHandler)
    assert isinstance(registry.get_handler("bash_command"), BashCommandHandler)
    assert registry.get_handler("missing") is None
    assert "computer_use" in registry
    assert "missing" not in registry


def test_builder_warns_when_overwriting(caplog):
    builder = ToolRegistryBuilder()
    spec = ToolSpec(name="echo", description="first")
    builder.register(spec, EchoHandler())
    with caplog.at_level(logging.WARNING, logger="tools.registry"):
        builder.register(ToolSpec(name="echo", description="second"), EchoHandler())
    registry = builder.build()
    assert [s.description for s in registry.specs()] == ["second"]
    assert "overwriting handler" in caplog.text


def test_custom_handler_dispatch():
    builder = ToolRegistryBuilder()
    builder.register(ToolSpec(name="echo", description="Echo"), EchoHandler())
    handler = builder.build().get_handler("echo")
    assert asyncio.run(handler.handle(None)).value == "echo"


def test_tool_spec_round_trips_through_mcp_tool():
    spec = ToolSpec(name="x", description="d", input_schema={"type": "object", "properties": {}})
    assert ToolSpec.from_mcp_tool(spec.to_mcp_tool()) == spec
