"""Configuration management for Standard Scout."""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .catalog import NETWORKS, get_network
from .models import NetworkProfile


@dataclass
class Config:
    """Scout configuration."""

    # RPC
    rpc_timeout_seconds: float = 30.0
    default_network: str = "ethereum"

    # Per-network endpoint overrides, keyed by network key
    rpc_overrides: dict[str, str] = field(default_factory=dict)
    fallback_overrides: dict[str, str] = field(default_factory=dict)

    # Paths
    data_dir: Path = field(default_factory=lambda: Path.home() / ".standard-scout")
    history_file: Optional[Path] = None

    def __post_init__(self):
        """Load configuration from environment."""
        load_dotenv()

        self.rpc_timeout_seconds = float(
            os.getenv("SCOUT_RPC_TIMEOUT_SECONDS", self.rpc_timeout_seconds)
        )
        self.default_network = os.getenv("SCOUT_DEFAULT_NETWORK", self.default_network)

        # SCOUT_<NETWORK>_RPC_URL / SCOUT_<NETWORK>_FALLBACK_RPC_URL
        for key in NETWORKS:
            primary = os.getenv(f"SCOUT_{key.upper()}_RPC_URL")
            if primary:
                self.rpc_overrides[key] = primary
            fallback = os.getenv(f"SCOUT_{key.upper()}_FALLBACK_RPC_URL")
            if fallback:
                self.fallback_overrides[key] = fallback

        data_dir = os.getenv("SCOUT_DATA_DIR")
        if data_dir:
            self.data_dir = Path(data_dir).expanduser()

        history_file = os.getenv("SCOUT_HISTORY_FILE")
        if history_file:
            self.history_file = Path(history_file).expanduser()
        elif self.history_file is None:
            self.history_file = self.data_dir / "history.json"

    def network(self, network_key: str) -> NetworkProfile:
        """Get the effective network profile, with endpoint overrides applied."""
        profile = get_network(network_key)

        changes = {}
        if network_key in self.rpc_overrides:
            changes["primary_endpoint"] = self.rpc_overrides[network_key]
        if network_key in self.fallback_overrides:
            changes["secondary_endpoint"] = self.fallback_overrides[network_key]

        return replace(profile, **changes) if changes else profile

    def validate(self) -> list[str]:
        """Validate configuration, return list of issues."""
        issues = []

        if self.default_network not in NETWORKS:
            issues.append(
                f"SCOUT_DEFAULT_NETWORK={self.default_network!r} is not one of: {', '.join(NETWORKS)}"
            )

        if self.rpc_timeout_seconds <= 0:
            issues.append("SCOUT_RPC_TIMEOUT_SECONDS must be positive")

        for key, url in {**self.rpc_overrides, **self.fallback_overrides}.items():
            if not url.startswith(("http://", "https://")):
                issues.append(f"RPC URL for {key} is not an http(s) URL: {url}")

        return issues
