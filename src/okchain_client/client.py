"""
OKChain Client - Main orchestration module.

This module provides the OKChainClient class that wires one BaseClient into
every module client:

- Request dispatch is handled by base_client.py
- Query modules live in modules/ (backend, staking, dex, token, order, auth)
- Transaction assembly is handled by tx_builder.py
- Data models are immutable structures in models/
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .base_client import BaseClient, RPCBaseClient
from .constants import (
    DEFAULT_CHAIN_ID,
    DEFAULT_FEES,
    DEFAULT_GAS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_NODE_URI,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
)
from .models import BroadcastMode, ClientConfig, RetryConfig
from .modules import (
    AuthClient,
    BackendClient,
    DexClient,
    OrderClient,
    StakingClient,
    TokenClient,
)
from .monitoring import Statistics
from .tx_builder import TxBuilder

load_dotenv()
logger = logging.getLogger(__name__)

_CONFIG_KEYS = ("node_uri", "chain_id", "broadcast_mode", "fees", "gas", "timeout")


class OKChainClient:
    """
    Main OKChain client orchestrator.

    Module clients are exposed as attributes and share one BaseClient:
    ``client.backend``, ``client.staking``, ``client.dex``, ``client.token``,
    ``client.order`` and ``client.auth``.
    """

    def __init__(
        self,
        config: ClientConfig,
        retry_config: Optional[RetryConfig] = None,
        base_client: Optional[BaseClient] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Node and transaction configuration
            retry_config: Transport retry behavior, used by the default base client
            base_client: Dispatch implementation; defaults to RPCBaseClient
        """
        self._config = config
        self._base_client = base_client or RPCBaseClient(config, retry_config)
        self._tx_builder = TxBuilder(self._base_client, config)
        self._closed = False

        self.backend = BackendClient(self._base_client, self._tx_builder)
        self.staking = StakingClient(self._base_client, self._tx_builder)
        self.dex = DexClient(self._base_client, self._tx_builder)
        self.token = TokenClient(self._base_client, self._tx_builder)
        self.order = OrderClient(self._base_client, self._tx_builder)
        self.auth = AuthClient(self._base_client, self._tx_builder)

        logger.info(f"OKChain client created for {config.node_uri} (chain {config.chain_id})")

    @classmethod
    def from_env(cls, retry_config: Optional[RetryConfig] = None) -> "OKChainClient":
        """Create client from ``OKCHAIN_*`` environment variables."""
        config = ClientConfig(
            node_uri=os.getenv("OKCHAIN_NODE_URI", DEFAULT_NODE_URI),
            chain_id=os.getenv("OKCHAIN_CHAIN_ID", DEFAULT_CHAIN_ID),
            broadcast_mode=os.getenv("OKCHAIN_BROADCAST_MODE", BroadcastMode.SYNC.value),
            fees=os.getenv("OKCHAIN_FEES", DEFAULT_FEES),
            gas=int(os.getenv("OKCHAIN_GAS", str(DEFAULT_GAS))),
            timeout=float(os.getenv("OKCHAIN_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )
        return cls(config, retry_config)

    @classmethod
    def from_yaml(cls, path: str) -> "OKChainClient":
        """
        Create client from a YAML file.

        The file holds the ``ClientConfig`` keys at the top level and an
        optional ``retry`` mapping with ``RetryConfig`` keys.
        """
        with open(path, "r") as f:
            document = yaml.safe_load(f) or {}

        if not isinstance(document, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        config_values: Dict[str, Any] = {k: document[k] for k in _CONFIG_KEYS if k in document}
        retry_values = document.get("retry") or {}
        if "retry_on_status" in retry_values:
            retry_values = {**retry_values, "retry_on_status": tuple(retry_values["retry_on_status"])}

        logger.info(f"Loaded client config from {path}")
        return cls(ClientConfig(**config_values), RetryConfig(**retry_values))

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_client(self) -> BaseClient:
        return self._base_client

    @property
    def tx_builder(self) -> TxBuilder:
        return self._tx_builder

    # Monitoring and health
    async def health_check(self) -> bool:
        """Check that the node answers."""
        health_check = getattr(self._base_client, "health_check", None)
        if health_check is None:
            return True
        try:
            return await health_check()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False

    def get_statistics(self) -> Optional[Statistics]:
        """Round-trip statistics, when the base client records them."""
        monitor = getattr(self._base_client, "monitor", None)
        return monitor.statistics if monitor is not None else None

    async def close(self) -> None:
        """Close client and cleanup resources."""
        if not self._closed:
            close = getattr(self._base_client, "close", None)
            if close is not None:
                await close()
            self._closed = True
            logger.info("OKChain client closed")

    # Context manager support
    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def __del__(self):
        """Cleanup on deletion."""
        if hasattr(self, "_closed") and not self._closed:
            logger.warning("OKChainClient not properly closed - call close() explicitly")


def create_okchain_client(
    node_uri: str = DEFAULT_NODE_URI,
    chain_id: str = DEFAULT_CHAIN_ID,
    broadcast_mode: BroadcastMode = BroadcastMode.SYNC,
    fees: str = DEFAULT_FEES,
    gas: int = DEFAULT_GAS,
    timeout: float = DEFAULT_TIMEOUT,
    max_retries: int = DEFAULT_MAX_RETRIES,
    retry_delay: float = DEFAULT_RETRY_DELAY,
) -> OKChainClient:
    """
    Factory function to create OKChain client with common configuration.

    Args:
        node_uri: Node JSON-RPC endpoint, e.g. ``http://localhost:26657``
        chain_id: Chain ID used in sign bytes
        broadcast_mode: When a broadcast returns
        fees: Fee paid by every transaction, e.g. ``"0.01okt"``
        gas: Gas limit of every transaction
        timeout: Request timeout in seconds
        max_retries: Maximum number of retry attempts on server errors
        retry_delay: Initial delay between retries in seconds

    Returns:
        Configured OKChainClient instance
    """
    config = ClientConfig(
        node_uri=node_uri,
        chain_id=chain_id,
        broadcast_mode=broadcast_mode,
        fees=fees,
        gas=gas,
        timeout=timeout,
    )

    retry_config = RetryConfig(
        max_retries=max_retries,
        retry_delay=retry_delay,
    )

    return OKChainClient(config, retry_config)
