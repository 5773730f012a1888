"""Flatcoin Keeper - limit order execution and position reads for Flatcoin.

Submits ``executeLimitOrder`` transactions through an Ethereum JSON-RPC node,
decodes custom revert errors from failed gas estimates, and batches read-only
position lookups against the viewer contract.
"""

from .config import KeeperConfig
from .connections import Web3Connections
from .decoder import RevertDecoder
from .exceptions import (
    GasEstimationError,
    KeeperError,
    MaxRetriesExceededError,
    NetworkError,
    RevertDecodingError,
    ValidationError,
)
from .executor import TransactionExecutor
from .types import (
    DecodedRevert,
    ErrorSignature,
    PendingTransaction,
    PositionSnapshot,
)
from .utils import (
    MAX_SAFE_INTEGER,
    pad_gas_limit,
    retry,
    to_quantity,
    to_safe_integer,
)

__version__ = "0.1.0"

__all__ = [
    # Components
    "TransactionExecutor",
    "RevertDecoder",
    "Web3Connections",
    "KeeperConfig",
    # Types
    "PositionSnapshot",
    "PendingTransaction",
    "DecodedRevert",
    "ErrorSignature",
    # Exceptions
    "KeeperError",
    "NetworkError",
    "ValidationError",
    "GasEstimationError",
    "MaxRetriesExceededError",
    "RevertDecodingError",
    # Utility functions
    "MAX_SAFE_INTEGER",
    "pad_gas_limit",
    "retry",
    "to_quantity",
    "to_safe_integer",
]
