"""
Root Relayer package.

Relays the L2 leaf chunk tree root into the L1 roots program once per interval.
"""

from .config import RelayerConfig
from .errors import ConfigError, CycleError, RelayerError, WalletError
from .models import CycleContext, CycleReport, RootPair, SourceSnapshot
from .relayer import RootRelayer

__all__ = [
    "RelayerConfig",
    "RootRelayer",
    "CycleContext",
    "CycleReport",
    "RootPair",
    "SourceSnapshot",
    "RelayerError",
    "ConfigError",
    "WalletError",
    "CycleError",
]
__version__ = "0.1.0"
