"""
Configuration models for OKChain client.

Immutable configuration structures following state-first design.
"""

from dataclasses import dataclass
from enum import Enum

from ..constants import (
    DEFAULT_CHAIN_ID,
    DEFAULT_FEES,
    DEFAULT_GAS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_NODE_URI,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
)
from ..utils import validate_url
from .tx import parse_coins


class BroadcastMode(Enum):
    """Transaction broadcast mode enumeration."""
    SYNC = "sync"  # Return after CheckTx
    ASYNC = "async"  # Return immediately
    BLOCK = "block"  # Return after the tx is committed in a block

    @property
    def rpc_method(self) -> str:
        """Tendermint RPC method used for this mode."""
        if self is BroadcastMode.BLOCK:
            return "broadcast_tx_commit"
        return f"broadcast_tx_{self.value}"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for OKChain client connection."""
    node_uri: str = DEFAULT_NODE_URI
    chain_id: str = DEFAULT_CHAIN_ID
    broadcast_mode: BroadcastMode = BroadcastMode.SYNC
    fees: str = DEFAULT_FEES
    gas: int = DEFAULT_GAS
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_node_uri()
        self._validate_chain_id()
        self._validate_broadcast_mode()
        self._validate_fees()
        self._validate_gas()

        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

    def _validate_node_uri(self):
        """Validate node URI format."""
        if not validate_url(self.node_uri):
            raise ValueError(f"Node URI must be a valid HTTP/HTTPS URL, got {self.node_uri!r}")

    def _validate_chain_id(self):
        """Validate chain ID."""
        if not self.chain_id:
            raise ValueError("Chain ID cannot be empty")

    def _validate_broadcast_mode(self):
        """Accept the mode as an enum member or its string value."""
        if isinstance(self.broadcast_mode, BroadcastMode):
            return
        try:
            # frozen dataclass, so normalize through object.__setattr__
            object.__setattr__(self, "broadcast_mode", BroadcastMode(self.broadcast_mode))
        except ValueError:
            raise ValueError(
                f"Invalid broadcast mode: {self.broadcast_mode!r} "
                f"(expected one of {[m.value for m in BroadcastMode]})"
            ) from None

    def _validate_fees(self):
        """Validate fees coin string."""
        try:
            parse_coins(self.fees)
        except ValueError as e:
            raise ValueError(f"Invalid fees {self.fees!r}: {e}") from e

    def _validate_gas(self):
        """Validate gas limit."""
        if not isinstance(self.gas, int) or isinstance(self.gas, bool) or self.gas <= 0:
            raise ValueError(f"Gas must be a positive integer, got {self.gas!r}")


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for HTTP transport retry behavior.

    Retries are off by default so transport failures reach the caller as-is.
    """
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    backoff_factor: float = 2.0
    retry_on_status: tuple[int, ...] = (500, 502, 503, 504)
