"""Pick a live JSON-RPC endpoint for a network."""

import logging
from typing import Callable

from .errors import AllEndpointsUnreachable, RPCError
from .models import NetworkProfile
from .rpc import RPCClient


logger = logging.getLogger(__name__)


class EndpointResolver:
    """Single-shot primary -> secondary failover.

    The primary is probed with ``eth_blockNumber``; the secondary is only
    tried if the primary fails. There are no retries and no backoff.
    """

    def __init__(self, rpc: RPCClient, networks: Callable[[str], NetworkProfile]):
        self.rpc = rpc
        self.networks = networks

    async def resolve(self, network_key: str) -> str:
        """Return a usable endpoint URL for ``network_key``."""
        network = self.networks(network_key)

        logger.info("Connecting to %s...", network.name)

        try:
            block = await self.rpc.block_number(network.primary_endpoint)
        except RPCError as primary_error:
            logger.warning("Primary RPC failed: %s", primary_error)

            if network.secondary_endpoint:
                try:
                    block = await self.rpc.block_number(network.secondary_endpoint)
                except RPCError as fallback_error:
                    logger.warning("Fallback RPC failed: %s", fallback_error)
                else:
                    logger.info("Connected to %s via fallback! Block: %d", network.name, block)
                    return network.secondary_endpoint

            raise AllEndpointsUnreachable(network_key, primary_error) from primary_error

        logger.info("Connected to %s! Block: %d", network.name, block)
        return network.primary_endpoint
