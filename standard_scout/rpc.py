"""JSON-RPC access to an EVM node."""

import asyncio
import itertools
import logging
from decimal import Decimal
from typing import Any, Optional

import httpx

from .errors import ProtocolError, RPCErrorKind, TransportError
from .models import ContractFacts


logger = logging.getLogger(__name__)

EMPTY_CODE = "0x"
WEI_PER_ETHER = Decimal(10) ** 18


def parse_quantity(value: Any) -> int:
    """Parse a 0x-prefixed hex quantity."""
    if not isinstance(value, str) or not value.startswith("0x"):
        raise ValueError(f"Not a hex quantity: {value!r}")
    return int(value, 16)


class RPCClient:
    """Stateless JSON-RPC 2.0 client; every call is its own HTTP round trip."""

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self._ids = itertools.count(1)

    async def call(self, endpoint: str, method: str, params: Optional[list] = None) -> Any:
        """Send one request and return its ``result``."""
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as http:
                resp = await http.post(endpoint, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(f"RPC request timed out: {e}", RPCErrorKind.TIMEOUT) from e
        except httpx.DecodingError as e:
            raise ProtocolError(
                f"RPC response could not be decoded: {e}", RPCErrorKind.MALFORMED_RESPONSE
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"RPC connection failed: {e}", RPCErrorKind.CONNECTION) from e

        if not resp.is_success:
            raise TransportError(
                f"RPC request failed: {resp.status_code}",
                RPCErrorKind.HTTP_STATUS,
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise ProtocolError(
                f"RPC response is not valid JSON: {e}", RPCErrorKind.MALFORMED_RESPONSE
            ) from e

        if not isinstance(data, dict):
            raise ProtocolError("RPC response is not a JSON object", RPCErrorKind.MALFORMED_RESPONSE)

        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ProtocolError(message or "Unknown RPC error", RPCErrorKind.PROTOCOL)

        if "result" not in data:
            raise ProtocolError("RPC response has no result", RPCErrorKind.MALFORMED_RESPONSE)

        return data["result"]

    async def block_number(self, endpoint: str) -> int:
        result = await self.call(endpoint, "eth_blockNumber")
        try:
            return parse_quantity(result)
        except ValueError as e:
            raise ProtocolError(str(e), RPCErrorKind.MALFORMED_RESPONSE) from e

    async def get_code(self, endpoint: str, address: str) -> str:
        code = await self.call(endpoint, "eth_getCode", [address, "latest"])
        if code is None:
            return EMPTY_CODE
        if not isinstance(code, str) or not code.startswith("0x"):
            raise ProtocolError(f"Malformed code: {code!r}", RPCErrorKind.MALFORMED_RESPONSE)
        return code

    async def get_balance(self, endpoint: str, address: str) -> int:
        result = await self.call(endpoint, "eth_getBalance", [address, "latest"])
        try:
            return parse_quantity(result)
        except ValueError as e:
            raise ProtocolError(str(e), RPCErrorKind.MALFORMED_RESPONSE) from e

    async def eth_call(self, endpoint: str, to: str, data: str) -> str:
        return await self.call(endpoint, "eth_call", [{"to": to, "data": data}, "latest"])

    async def get_contract_facts(self, endpoint: str, address: str) -> tuple[ContractFacts, str]:
        """Read code and balance concurrently.

        Returns the facts together with the deployed bytecode so callers do
        not need a second ``eth_getCode`` round trip.
        """
        code, balance = await asyncio.gather(
            self.get_code(endpoint, address),
            self.get_balance(endpoint, address),
        )

        facts = ContractFacts(
            bytecode_byte_length=max(len(code) - 2, 0) // 2,
            native_balance=Decimal(balance) / WEI_PER_ETHER,
            has_code=code != EMPTY_CODE,
        )
        logger.debug(
            "Facts for %s: %d bytes of code, balance %s",
            address, facts.bytecode_byte_length, facts.native_balance,
        )
        return facts, code
