"""The two detection strategies: bytecode selector matching and interface probing."""

import logging
from dataclasses import dataclass
from typing import Optional

from .catalog import SUPPORTS_INTERFACE_SELECTOR
from .errors import RPCError
from .models import BytecodeRule, InterfaceRule, StandardDefinition
from .rpc import EMPTY_CODE, RPCClient


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BytecodeMatch:
    detected: bool
    match_ratio: float
    matched_signatures: tuple[str, ...]


@dataclass(frozen=True)
class ProbeResult:
    detected: bool
    failure_reason: Optional[str] = None


def classify_bytecode(bytecode: str, standard: StandardDefinition) -> BytecodeMatch:
    """Check which of a standard's selectors appear in the bytecode.

    This is a substring test over the hex text, not a parse of the dispatch
    table: a selector sitting inside push data counts as a match.
    """
    rule = standard.rule
    if not isinstance(rule, BytecodeRule):
        raise TypeError(f"{standard.name} is not a bytecode-heuristic standard")

    if not rule.signatures:
        return BytecodeMatch(detected=False, match_ratio=0.0, matched_signatures=())

    code = bytecode.lower()
    matched = tuple(selector for selector in rule.signatures if selector in code)

    ratio = len(matched) / len(rule.signatures) * 100
    return BytecodeMatch(
        detected=ratio >= rule.required_match_ratio,
        match_ratio=ratio,
        matched_signatures=matched,
    )


def supports_interface_calldata(interface_id: str) -> str:
    """Encode ``supportsInterface(interface_id)``; bytes4 is left-aligned in its 32-byte slot."""
    return "0x" + SUPPORTS_INTERFACE_SELECTOR + interface_id[2:].lower().ljust(64, "0")


async def probe_interface(
    rpc: RPCClient,
    endpoint: str,
    address: str,
    standard: StandardDefinition,
) -> ProbeResult:
    """Ask the contract whether it implements the standard's interface id.

    A failed call is reported as not detected, with the reason attached.
    """
    rule = standard.rule
    if not isinstance(rule, InterfaceRule):
        raise TypeError(f"{standard.name} is not an interface-probe standard")

    data = supports_interface_calldata(rule.interface_id)

    try:
        result = await rpc.eth_call(endpoint, address, data)
    except RPCError as e:
        logger.debug("Probe for %s failed: %s", standard.name, e)
        return ProbeResult(detected=False, failure_reason=str(e))

    if result is None or result == EMPTY_CODE:
        return ProbeResult(detected=False)

    try:
        value = int(result, 16)
    except (TypeError, ValueError):
        return ProbeResult(detected=False, failure_reason=f"Malformed probe result: {result!r}")

    return ProbeResult(detected=bool(value & 1))
