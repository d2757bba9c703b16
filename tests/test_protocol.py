import pytest

from backend.app import __version__
from backend.app.mcp.protocol import handle_message


@pytest.mark.asyncio
async def test_initialize_reports_server_info():
    reply = await handle_message({
        "jsonrpc": "2.0", "id": 1, "method": "initialize",
        "params": {"protocolVersion": "2025-03-26", "capabilities": {}},
    })
    assert reply["id"] == 1
    assert reply["result"]["protocolVersion"] == "2025-03-26"
    assert reply["result"]["capabilities"] == {"tools": {}}
    assert reply["result"]["serverInfo"] == {"name": "perplexity-mcp", "version": __version__}


@pytest.mark.asyncio
async def test_initialize_falls_back_to_known_version():
    reply = await handle_message({
        "jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "1999-01-01"},
    })
    assert reply["result"]["protocolVersion"] == "2024-11-05"


@pytest.mark.asyncio
async def test_tools_list_matches_registry():
    reply = await handle_message({"jsonrpc": "2.0", "id": 2, "method": "tools/list"})
    names = [t["name"] for t in reply["result"]["tools"]]
    assert names == ["perplexity_ask", "perplexity_research", "perplexity_reason"]


@pytest.mark.asyncio
async def test_ping():
    assert await handle_message({"jsonrpc": "2.0", "id": 3, "method": "ping"}) == {
        "jsonrpc": "2.0", "result": {}, "id": 3,
    }


@pytest.mark.asyncio
async def test_unknown_method():
    reply = await handle_message({"jsonrpc": "2.0", "id": 4, "method": "resources/list"})
    assert reply["error"]["code"] == -32601


@pytest.mark.asyncio
@pytest.mark.parametrize("message", [[1, 2], "ping", {"id": 5, "method": "ping"}])
async def test_invalid_request(message):
    reply = await handle_message(message)
    assert reply["error"]["code"] == -32600


@pytest.mark.asyncio
async def test_client_responses_and_notifications_are_ignored():
    assert await handle_message({"jsonrpc": "2.0", "id": 9, "result": {}}) is None
    assert await handle_message({"jsonrpc": "2.0", "method": "notifications/cancelled"}) is None


@pytest.mark.asyncio
async def test_tools_call_without_arguments_is_error_result():
    reply = await handle_message({
        "jsonrpc": "2.0", "id": 6, "method": "tools/call", "params": {"name": "perplexity_ask"},
    })
    assert reply["result"] == {
        "content": [{"type": "text", "text": "Error: No arguments provided"}],
        "isError": True,
    }
