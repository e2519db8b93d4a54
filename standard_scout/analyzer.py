"""Standard detection orchestrator."""

import asyncio
import logging
import re
import time
from datetime import datetime, timezone
from typing import Optional, Sequence

from .catalog import STANDARDS
from .classifiers import classify_bytecode, probe_interface
from .config import Config
from .errors import InvalidAddress, NotAContract
from .history import HistoryLog
from .models import (
    AnalysisReport,
    ClassificationMode,
    ClassificationOutcome,
    StandardDefinition,
)
from .resolver import EndpointResolver
from .rpc import RPCClient


logger = logging.getLogger(__name__)

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_address(address: str) -> bool:
    return bool(ADDRESS_RE.fullmatch(address))


class StandardAnalyzer:
    """Classify a contract against every cataloged standard.

    Assumes at most one analysis in flight per caller; nothing below the
    history log is shared between analyses, so independent callers may run
    concurrently.
    """

    def __init__(
        self,
        config: Config,
        rpc: Optional[RPCClient] = None,
        resolver: Optional[EndpointResolver] = None,
        history: Optional[HistoryLog] = None,
        standards: Sequence[StandardDefinition] = STANDARDS,
    ):
        self.config = config
        self.rpc = rpc or RPCClient(timeout=config.rpc_timeout_seconds)
        self.resolver = resolver or EndpointResolver(self.rpc, config.network)
        self.history = history if history is not None else HistoryLog()
        self.standards = tuple(standards)

    async def analyze(self, address: str, network_key: str) -> AnalysisReport:
        """Analyze ``address`` on ``network_key`` and record it in the history."""
        if not is_valid_address(address):
            raise InvalidAddress(address)

        start_time = time.time()
        logger.info("Starting analysis for %s on %s", address, network_key)

        endpoint = await self.resolver.resolve(network_key)

        facts, bytecode = await self.rpc.get_contract_facts(endpoint, address)
        if not facts.has_code:
            raise NotAContract(address, network_key)

        logger.debug("Bytecode size: %d bytes", facts.bytecode_byte_length)

        outcomes = await asyncio.gather(*(
            self._classify(endpoint, address, bytecode, standard)
            for standard in self.standards
        ))

        report = AnalysisReport(
            address=address,
            network_key=network_key,
            timestamp=datetime.now(timezone.utc),
            contract_facts=facts,
            outcomes=tuple(outcomes),
        )

        logger.info(
            "Analysis complete! Detected %d/%d standards in %.1fs",
            report.detected_count, len(self.standards), time.time() - start_time,
        )

        self.history.record(report)
        return report

    async def _classify(
        self,
        endpoint: str,
        address: str,
        bytecode: str,
        standard: StandardDefinition,
    ) -> ClassificationOutcome:
        """Run one check; never raises, a failure becomes a negative outcome."""
        logger.debug("Checking %s...", standard.name)

        try:
            if standard.mode == ClassificationMode.INTERFACE_PROBE:
                probe = await probe_interface(self.rpc, endpoint, address, standard)
                return ClassificationOutcome(
                    standard=standard,
                    detected=probe.detected,
                    probe_failure_reason=probe.failure_reason,
                )

            match = classify_bytecode(bytecode, standard)
            return ClassificationOutcome(
                standard=standard,
                detected=match.detected,
                match_ratio=match.match_ratio,
                matched_signatures=match.matched_signatures,
            )
        except Exception as e:
            logger.exception("Error checking %s", standard.name)
            if standard.mode == ClassificationMode.INTERFACE_PROBE:
                return ClassificationOutcome(standard=standard, detected=False, probe_failure_reason=str(e))
            return ClassificationOutcome(
                standard=standard,
                detected=False,
                match_ratio=0.0,
                matched_signatures=(),
            )
