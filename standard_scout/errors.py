"""Exception taxonomy for Standard Scout."""

from enum import Enum
from typing import Optional


class RPCErrorKind(str, Enum):
    """What went wrong on a JSON-RPC round trip."""
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    HTTP_STATUS = "http_status"
    PROTOCOL = "protocol"
    MALFORMED_RESPONSE = "malformed_response"


class ScoutError(Exception):
    """Base class for every error raised by Standard Scout."""


class InvalidAddress(ScoutError):
    """The address is not 0x followed by 40 hex characters."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid address format: {address!r}")


class NoSuchNetwork(ScoutError):
    """The network key is not in the catalog."""

    def __init__(self, network_key: str):
        self.network_key = network_key
        super().__init__(f"Unknown network: {network_key!r}")


class NotAContract(ScoutError):
    """The address holds no code (externally owned account)."""

    def __init__(self, address: str, network_key: str):
        self.address = address
        self.network_key = network_key
        super().__init__(
            f"{address} is an externally owned account on {network_key}, not a contract"
        )


class RPCError(ScoutError):
    """A JSON-RPC call could not produce a result."""

    def __init__(self, message: str, kind: RPCErrorKind, status_code: Optional[int] = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)


class TransportError(RPCError):
    """The HTTP round trip failed or returned a non-success status."""


class ProtocolError(RPCError):
    """The node answered, but with an error object or an unusable envelope."""


class AllEndpointsUnreachable(ScoutError):
    """Neither the primary nor the secondary endpoint passed the liveness probe."""

    def __init__(self, network_key: str, primary_error: Exception):
        self.network_key = network_key
        self.primary_error = primary_error
        super().__init__(str(primary_error))


def describe_error(error: Exception) -> str:
    """Turn an analysis failure into a sentence suitable for end users."""
    if isinstance(error, InvalidAddress):
        return "Invalid Ethereum address format."
    if isinstance(error, NoSuchNetwork):
        return f"Invalid network selected: {error.network_key}."
    if isinstance(error, NotAContract):
        return "This address is an Externally Owned Account (EOA), not a smart contract."
    if isinstance(error, AllEndpointsUnreachable):
        cause = error.primary_error
        if isinstance(cause, RPCError):
            return "Analysis failed. " + _describe_rpc_error(cause)
        return f"Analysis failed. {cause}"
    if isinstance(error, RPCError):
        return "Analysis failed. " + _describe_rpc_error(error)
    return f"Analysis failed. {error}"


def _describe_rpc_error(error: RPCError) -> str:
    if error.kind == RPCErrorKind.TIMEOUT:
        return "Request timed out. The network may be slow."
    if error.kind == RPCErrorKind.CONNECTION:
        return "Network connection failed. Please check your connection."
    if error.kind == RPCErrorKind.HTTP_STATUS:
        return f"RPC endpoint returned HTTP {error.status_code}."
    return str(error)
