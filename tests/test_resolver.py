import httpx
import pytest

from standard_scout.errors import AllEndpointsUnreachable, NoSuchNetwork
from standard_scout.resolver import EndpointResolver
from standard_scout.rpc import RPCClient

from .conftest import FALLBACK, PRIMARY, make_networks


@pytest.mark.asyncio
async def test_primary_endpoint_is_used_when_live(node, rpc, networks):
    endpoint = await EndpointResolver(rpc, networks).resolve("testnet")

    assert endpoint == PRIMARY
    assert node.hosts("eth_blockNumber") == {"primary.test"}


@pytest.mark.asyncio
async def test_falls_back_to_secondary(node, rpc, networks):
    node.down.add("primary.test")

    endpoint = await EndpointResolver(rpc, networks).resolve("testnet")

    assert endpoint == FALLBACK
    assert [call[0] for call in node.calls] == ["primary.test", "fallback.test"]


@pytest.mark.asyncio
async def test_malformed_liveness_result_triggers_fallback(networks):
    def handler(request):
        result = "pending" if request.url.host == "primary.test" else "0x1"
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})

    rpc = RPCClient(transport=httpx.MockTransport(handler))

    assert await EndpointResolver(rpc, networks).resolve("testnet") == FALLBACK


@pytest.mark.asyncio
async def test_both_down_reports_primary_failure(networks):
    def handler(request):
        if request.url.host == "primary.test":
            return httpx.Response(503)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": {"message": "rate limited"}})

    rpc = RPCClient(transport=httpx.MockTransport(handler))

    with pytest.raises(AllEndpointsUnreachable) as exc_info:
        await EndpointResolver(rpc, networks).resolve("testnet")

    assert str(exc_info.value) == "RPC request failed: 503"
    assert exc_info.value.network_key == "testnet"


@pytest.mark.asyncio
async def test_no_secondary_configured(node, rpc):
    node.down.add("primary.test")
    resolver = EndpointResolver(rpc, make_networks(secondary=None))

    with pytest.raises(AllEndpointsUnreachable):
        await resolver.resolve("testnet")

    assert node.hosts("eth_blockNumber") == {"primary.test"}


@pytest.mark.asyncio
async def test_unknown_network(node, rpc, networks):
    with pytest.raises(NoSuchNetwork):
        await EndpointResolver(rpc, networks).resolve("mars")

    assert node.calls == []


@pytest.mark.asyncio
async def test_corrupt_primary_body_triggers_fallback(networks):
    def handler(request):
        if request.url.host == "primary.test":
            return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x1"})

    rpc = RPCClient(transport=httpx.MockTransport(handler))

    assert await EndpointResolver(rpc, networks).resolve("testnet") == FALLBACK
