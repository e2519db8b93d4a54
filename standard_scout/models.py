"""Data models for Standard Scout."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional, Union


SELECTOR_RE = re.compile(r"^[0-9a-f]{8}$")
INTERFACE_ID_RE = re.compile(r"^0x[0-9a-fA-F]{8}$")


class ClassificationMode(str, Enum):
    """How a standard is detected."""
    BYTECODE_HEURISTIC = "bytecode_heuristic"
    INTERFACE_PROBE = "interface_probe"


@dataclass(frozen=True)
class NetworkProfile:
    """A chain and the JSON-RPC endpoints used to reach it."""
    key: str
    name: str
    primary_endpoint: str
    chain_id: int
    explorer_base_url: str
    secondary_endpoint: Optional[str] = None

    def explorer_address_url(self, address: str) -> str:
        return f"{self.explorer_base_url.rstrip('/')}/address/{address}"


@dataclass(frozen=True)
class BytecodeRule:
    """Detect a standard by looking for its selectors in deployed bytecode."""
    signatures: tuple[str, ...]
    required_match_ratio: float = 100.0

    mode: ClassVar[ClassificationMode] = ClassificationMode.BYTECODE_HEURISTIC

    def __post_init__(self):
        if not 0 < self.required_match_ratio <= 100:
            raise ValueError(
                f"required_match_ratio must be in (0, 100], got {self.required_match_ratio}"
            )
        for selector in self.signatures:
            if not SELECTOR_RE.match(selector):
                raise ValueError(f"Selector must be 8 lowercase hex characters: {selector!r}")


@dataclass(frozen=True)
class InterfaceRule:
    """Detect a standard by asking the contract via supportsInterface(bytes4)."""
    interface_id: str

    mode: ClassVar[ClassificationMode] = ClassificationMode.INTERFACE_PROBE

    def __post_init__(self):
        if not INTERFACE_ID_RE.match(self.interface_id):
            raise ValueError(f"Interface id must be 0x followed by 8 hex characters: {self.interface_id!r}")


DetectionRule = Union[BytecodeRule, InterfaceRule]


@dataclass(frozen=True)
class StandardDefinition:
    """A cataloged interface or token standard."""
    name: str
    category: str
    description: str
    rule: DetectionRule

    @property
    def mode(self) -> ClassificationMode:
        return self.rule.mode


@dataclass(frozen=True)
class ContractFacts:
    """Account facts read once per analysis."""
    bytecode_byte_length: int
    native_balance: Decimal
    has_code: bool


@dataclass(frozen=True)
class ClassificationOutcome:
    """Result of checking one standard against one contract."""
    standard: StandardDefinition
    detected: bool
    match_ratio: Optional[float] = None
    matched_signatures: Optional[tuple[str, ...]] = None
    probe_failure_reason: Optional[str] = None

    @property
    def total_signatures(self) -> Optional[int]:
        if isinstance(self.standard.rule, BytecodeRule):
            return len(self.standard.rule.signatures)
        return None

    def to_dict(self) -> dict:
        data = {
            "standard": self.standard.name,
            "category": self.standard.category,
            "mode": self.standard.mode.value,
            "detected": self.detected,
        }
        if self.standard.mode == ClassificationMode.BYTECODE_HEURISTIC:
            data["match_ratio"] = self.match_ratio
            data["matched_signatures"] = list(self.matched_signatures or ())
            data["total_signatures"] = self.total_signatures
        elif self.probe_failure_reason is not None:
            data["probe_failure_reason"] = self.probe_failure_reason
        return data


@dataclass(frozen=True)
class AnalysisReport:
    """Everything learned about one contract in one analysis."""
    address: str
    network_key: str
    timestamp: datetime
    contract_facts: ContractFacts
    outcomes: tuple[ClassificationOutcome, ...] = field(default_factory=tuple)

    @property
    def detected(self) -> list[ClassificationOutcome]:
        return [o for o in self.outcomes if o.detected]

    @property
    def detected_count(self) -> int:
        return len(self.detected)

    @property
    def coverage(self) -> float:
        """Share of cataloged standards detected, as a percentage."""
        if not self.outcomes:
            return 0.0
        return self.detected_count / len(self.outcomes) * 100

    @property
    def detected_categories(self) -> list[str]:
        categories = []
        for outcome in self.detected:
            if outcome.standard.category not in categories:
                categories.append(outcome.standard.category)
        return categories

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "network": self.network_key,
            "timestamp": self.timestamp.isoformat(),
            "contract": {
                "code_size": self.contract_facts.bytecode_byte_length,
                "balance": str(self.contract_facts.native_balance),
                "has_code": self.contract_facts.has_code,
            },
            "detected_count": self.detected_count,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


@dataclass(frozen=True)
class HistoryEntry:
    """Condensed summary of a completed analysis."""
    address: str
    network_key: str
    timestamp: datetime
    detected_count: int

    @classmethod
    def from_report(cls, report: AnalysisReport) -> "HistoryEntry":
        return cls(
            address=report.address,
            network_key=report.network_key,
            timestamp=report.timestamp,
            detected_count=report.detected_count,
        )

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "network": self.network_key,
            "timestamp": self.timestamp.isoformat(),
            "detected_count": self.detected_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        return cls(
            address=data["address"],
            network_key=data["network"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            detected_count=int(data["detected_count"]),
        )
