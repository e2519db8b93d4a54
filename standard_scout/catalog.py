"""Static network and standard catalogs."""

from .errors import NoSuchNetwork
from .models import BytecodeRule, InterfaceRule, NetworkProfile, StandardDefinition


# Selector of supportsInterface(bytes4)
SUPPORTS_INTERFACE_SELECTOR = "01ffc9a7"


NETWORKS: dict[str, NetworkProfile] = {
    "ethereum": NetworkProfile(
        key="ethereum",
        name="Ethereum",
        primary_endpoint="https://ethereum.publicnode.com",
        secondary_endpoint="https://rpc.ankr.com/eth",
        chain_id=1,
        explorer_base_url="https://etherscan.io",
    ),
    "polygon": NetworkProfile(
        key="polygon",
        name="Polygon",
        primary_endpoint="https://polygon.llamarpc.com",
        secondary_endpoint="https://rpc.ankr.com/polygon",
        chain_id=137,
        explorer_base_url="https://polygonscan.com",
    ),
    "arbitrum": NetworkProfile(
        key="arbitrum",
        name="Arbitrum",
        primary_endpoint="https://arbitrum.llamarpc.com",
        secondary_endpoint="https://rpc.ankr.com/arbitrum",
        chain_id=42161,
        explorer_base_url="https://arbiscan.io",
    ),
    "optimism": NetworkProfile(
        key="optimism",
        name="Optimism",
        primary_endpoint="https://optimism.llamarpc.com",
        secondary_endpoint="https://rpc.ankr.com/optimism",
        chain_id=10,
        explorer_base_url="https://optimistic.etherscan.io",
    ),
    "base": NetworkProfile(
        key="base",
        name="Base",
        primary_endpoint="https://mainnet.base.org",
        secondary_endpoint="https://base.llamarpc.com",
        chain_id=8453,
        explorer_base_url="https://basescan.org",
    ),
    "bsc": NetworkProfile(
        key="bsc",
        name="BNB Chain",
        primary_endpoint="https://bsc.publicnode.com",
        secondary_endpoint="https://rpc.ankr.com/bsc",
        chain_id=56,
        explorer_base_url="https://bscscan.com",
    ),
}


STANDARDS: tuple[StandardDefinition, ...] = (
    StandardDefinition(
        name="ERC-20",
        category="Token",
        description="Fungible Token Standard - The most widely used standard for cryptocurrencies and utility tokens",
        rule=BytecodeRule(
            signatures=(
                "a9059cbb",  # transfer(address,uint256)
                "18160ddd",  # totalSupply()
                "70a08231",  # balanceOf(address)
                "23b872dd",  # transferFrom(address,address,uint256)
                "095ea7b3",  # approve(address,uint256)
                "dd62ed3e",  # allowance(address,address)
                "06fdde03",  # name()
                "95d89b41",  # symbol()
                "313ce567",  # decimals()
            ),
            required_match_ratio=60,
        ),
    ),
    StandardDefinition(
        name="ERC-721",
        category="NFT",
        description="Non-Fungible Token Standard - Each token is unique and indivisible",
        rule=InterfaceRule(interface_id="0x80ac58cd"),
    ),
    StandardDefinition(
        name="ERC-1155",
        category="Token",
        description="Multi-Token Standard - Supports both fungible and non-fungible tokens in a single contract",
        rule=InterfaceRule(interface_id="0xd9b67a26"),
    ),
    StandardDefinition(
        name="ERC-721 Metadata",
        category="NFT",
        description="NFT Metadata Extension - Adds name, symbol, and tokenURI functionality",
        rule=InterfaceRule(interface_id="0x5b5e139f"),
    ),
    StandardDefinition(
        name="ERC-721 Enumerable",
        category="NFT",
        description="NFT Enumeration Extension - Allows iteration over all tokens",
        rule=InterfaceRule(interface_id="0x780e9d63"),
    ),
    StandardDefinition(
        name="ERC-4906",
        category="NFT",
        description="EIP-4906 Metadata Update Extension - Emits events when NFT metadata changes",
        rule=InterfaceRule(interface_id="0x49064906"),
    ),
    StandardDefinition(
        name="ERC-2981",
        category="NFT",
        description="NFT Royalty Standard - Enables on-chain royalty payments",
        rule=InterfaceRule(interface_id="0x2a55205a"),
    ),
    StandardDefinition(
        name="ERC-1967",
        category="Proxy",
        description="Proxy Storage Slots - Standard for upgradeable smart contracts",
        rule=BytecodeRule(
            signatures=(
                "5c60da1b",  # implementation()
                "3659cfe6",  # upgradeTo(address)
            ),
            required_match_ratio=50,
        ),
    ),
    StandardDefinition(
        name="ERC-173",
        category="Access",
        description="Contract Ownership Standard - Defines ownership transfer mechanisms",
        rule=InterfaceRule(interface_id="0x7f5828d0"),
    ),
    StandardDefinition(
        name="ERC-165",
        category="Core",
        description="Standard Interface Detection - Allows contracts to advertise their interfaces",
        rule=BytecodeRule(signatures=(SUPPORTS_INTERFACE_SELECTOR,), required_match_ratio=100),
    ),
    StandardDefinition(
        name="ERC-3156",
        category="DeFi",
        description="Flash Loan Standard - Enables uncollateralized loans within a single transaction",
        rule=InterfaceRule(interface_id="0xb3086308"),
    ),
    StandardDefinition(
        name="ERC-4626",
        category="DeFi",
        description="Tokenized Vault Standard - Standard for yield-bearing vaults",
        rule=BytecodeRule(
            signatures=(
                "ce96cb77",  # maxWithdraw(address)
                "38d52e0f",  # asset()
                "c6e6f592",  # convertToShares(uint256)
                "ba087652",  # redeem(uint256,address,address)
            ),
            required_match_ratio=75,
        ),
    ),
)


def get_network(network_key: str) -> NetworkProfile:
    """Look up a network profile by key."""
    try:
        return NETWORKS[network_key]
    except KeyError:
        raise NoSuchNetwork(network_key) from None


def get_standard(name: str) -> StandardDefinition:
    for standard in STANDARDS:
        if standard.name == name:
            return standard
    raise KeyError(name)
