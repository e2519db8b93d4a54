import asyncio
import json

import httpx
import pytest

from standard_scout.errors import NoSuchNetwork
from standard_scout.models import NetworkProfile
from standard_scout.rpc import RPCClient


PRIMARY = "https://primary.test"
FALLBACK = "https://fallback.test"

CONTRACT = "0x" + "ab" * 20
EOA = "0x" + "cd" * 20


class FakeNode:
    """In-memory JSON-RPC node served through httpx.MockTransport."""

    def __init__(self):
        self.calls = []
        self.down = set()
        self.block = "0x10"
        self.code = "0x"
        self.balance = "0x0"
        self.supported = set()
        self.reverting = set()
        self.call_results = {}
        self.delays = {}

    async def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        host = request.url.host
        method = body["method"]
        params = body["params"]
        self.calls.append((host, method, params))

        if host in self.down:
            return httpx.Response(503)

        if method == "eth_blockNumber":
            result = self.block
        elif method == "eth_getCode":
            result = self.code
        elif method == "eth_getBalance":
            result = self.balance
        elif method == "eth_call":
            interface_id = params[0]["data"][10:18]
            await asyncio.sleep(self.delays.get(interface_id, 0))
            if interface_id in self.reverting:
                return httpx.Response(200, json={
                    "jsonrpc": "2.0",
                    "id": body["id"],
                    "error": {"code": 3, "message": "execution reverted"},
                })
            if interface_id in self.call_results:
                result = self.call_results[interface_id]
            else:
                result = "0x" + ("1" if interface_id in self.supported else "0").rjust(64, "0")
        else:
            return httpx.Response(200, json={
                "jsonrpc": "2.0",
                "id": body["id"],
                "error": {"code": -32601, "message": "method not found"},
            })

        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    def methods(self, method):
        return [call for call in self.calls if call[1] == method]

    def hosts(self, method):
        return {call[0] for call in self.methods(method)}


def make_networks(secondary=FALLBACK):
    profile = NetworkProfile(
        key="testnet",
        name="Testnet",
        primary_endpoint=PRIMARY,
        secondary_endpoint=secondary,
        chain_id=31337,
        explorer_base_url="https://explorer.test",
    )

    def lookup(network_key):
        if network_key != profile.key:
            raise NoSuchNetwork(network_key)
        return profile

    return lookup


@pytest.fixture
def node():
    return FakeNode()


@pytest.fixture
def rpc(node):
    return RPCClient(transport=httpx.MockTransport(node.handler))


@pytest.fixture
def networks():
    return make_networks()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("SCOUT_DATA_DIR", str(tmp_path / "scout"))
    monkeypatch.delenv("SCOUT_HISTORY_FILE", raising=False)
    monkeypatch.delenv("SCOUT_DEFAULT_NETWORK", raising=False)
