# -*- coding: utf-8 -*-
"""
Tests for OKChainClient construction and configuration.
"""

from unittest.mock import AsyncMock, patch

import pytest

from okchain_client.base_client import RPCBaseClient
from okchain_client.client import OKChainClient, create_okchain_client
from okchain_client.models.config import BroadcastMode, ClientConfig, RetryConfig
from okchain_client.modules import (
    AuthClient,
    BackendClient,
    DexClient,
    OrderClient,
    StakingClient,
    TokenClient,
)


class TestClientConfig:
    """Test configuration validation."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.node_uri == "http://localhost:26657"
        assert config.broadcast_mode is BroadcastMode.SYNC
        assert config.gas == 200000

    def test_broadcast_mode_from_string(self):
        assert ClientConfig(broadcast_mode="block").broadcast_mode is BroadcastMode.BLOCK
        assert BroadcastMode.BLOCK.rpc_method == "broadcast_tx_commit"
        assert BroadcastMode.ASYNC.rpc_method == "broadcast_tx_async"

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"node_uri": "localhost:26657"}, "Node URI"),
            ({"chain_id": ""}, "Chain ID"),
            ({"broadcast_mode": "fast"}, "broadcast mode"),
            ({"fees": "free"}, "fees"),
            ({"gas": 0}, "Gas"),
            ({"timeout": 0}, "Timeout"),
        ],
    )
    def test_invalid(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            ClientConfig(**kwargs)

    def test_retry_defaults(self):
        retry = RetryConfig()
        assert retry.max_retries == 0
        assert 503 in retry.retry_on_status


class TestOKChainClientInit:
    """Test client wiring."""

    def test_modules_share_base_client(self, client, mock_base_client):
        assert isinstance(client.backend, BackendClient)
        assert isinstance(client.staking, StakingClient)
        assert isinstance(client.dex, DexClient)
        assert isinstance(client.token, TokenClient)
        assert isinstance(client.order, OrderClient)
        assert isinstance(client.auth, AuthClient)
        assert client.base_client is mock_base_client
        assert client.backend._base_client is mock_base_client
        assert client.get_statistics() is None

    def test_default_base_client(self, client_config):
        client = OKChainClient(client_config)
        assert isinstance(client.base_client, RPCBaseClient)
        assert client.get_statistics().total_requests == 0

    def test_from_env(self):
        with patch.dict("os.environ", {
            "OKCHAIN_NODE_URI": "http://node.example.com:26657",
            "OKCHAIN_CHAIN_ID": "okchain-testnet",
            "OKCHAIN_BROADCAST_MODE": "async",
            "OKCHAIN_FEES": "0.02okt",
            "OKCHAIN_GAS": "300000",
            "OKCHAIN_TIMEOUT": "5",
        }):
            client = OKChainClient.from_env()

        assert client.config.node_uri == "http://node.example.com:26657"
        assert client.config.chain_id == "okchain-testnet"
        assert client.config.broadcast_mode is BroadcastMode.ASYNC
        assert client.config.gas == 300000
        assert client.config.timeout == 5.0

    def test_from_env_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            client = OKChainClient.from_env()

        assert client.config == ClientConfig()

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "okchain.yaml"
        path.write_text(
            "node_uri: http://127.0.0.1:26657\n"
            "chain_id: okchain\n"
            "broadcast_mode: block\n"
            "gas: 250000\n"
            "retry:\n"
            "  max_retries: 2\n"
            "  retry_on_status: [502, 503]\n"
        )

        client = OKChainClient.from_yaml(str(path))

        assert client.config.node_uri == "http://127.0.0.1:26657"
        assert client.config.broadcast_mode is BroadcastMode.BLOCK
        assert client.config.gas == 250000
        assert client.base_client._http_client._retry_config.retry_on_status == (502, 503)

    def test_from_yaml_not_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="mapping"):
            OKChainClient.from_yaml(str(path))

    def test_factory(self):
        client = create_okchain_client(
            node_uri="https://node.example.com", chain_id="okchain-1", max_retries=3
        )
        assert client.config.chain_id == "okchain-1"
        assert client.base_client._http_client._retry_config.max_retries == 3


class TestLifecycle:
    """Test closing and health checks."""

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, client_config):
        async with OKChainClient(client_config) as client:
            close = AsyncMock()
            client.base_client.close = close

        close.assert_awaited_once()
        assert client._closed

    @pytest.mark.asyncio
    async def test_close_twice(self, client):
        await client.close()
        await client.close()
        assert client._closed

    @pytest.mark.asyncio
    async def test_health_check_failure(self, client_config):
        client = OKChainClient(client_config)
        client.base_client.health_check = AsyncMock(side_effect=RuntimeError("down"))

        assert await client.health_check() is False
        await client.close()

    @pytest.mark.asyncio
    async def test_health_check_without_support(self, client):
        assert await client.health_check() is True
