"""Standard Scout: detect which ERC standards an on-chain contract implements."""
from .analyzer import StandardAnalyzer
from .config import Config
from .history import HistoryLog, JSONHistoryStore

__version__ = "0.1.0"

__all__ = ["StandardAnalyzer", "Config", "HistoryLog", "JSONHistoryStore"]
