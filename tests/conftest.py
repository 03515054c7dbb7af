# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing OKChain client.
"""

import hashlib
from typing import List

import pytest

from okchain_client.client import OKChainClient
from okchain_client.mocks import MockBaseClient
from okchain_client.models.config import ClientConfig
from okchain_client.models.tx import StdSignature


ADDR = "okchain1dcsxvxgj374dv3wt9szflf9nz6342juzzkjnlz"
STAKING_ADDR = "okchain1alq9na49n9yycysh889rl90g9nhe58lcv27tfj"
VAL_ADDR = "okchainvaloper1alq9na49n9yycysh889rl90g9nhe58lcs50wu5"
PROXY_ADDR = "okchain1npm82ty95j9s7xja5s92hajwszdklh7kch23as"
PRODUCT = "btc-000_okt"


class FakeSigner:
    """Signer that records what it was asked to sign."""

    def __init__(self, address: str = ADDR):
        self._address = address
        self.signed: List[bytes] = []

    @property
    def address(self) -> str:
        return self._address

    def sign(self, sign_bytes: bytes) -> StdSignature:
        self.signed.append(sign_bytes)
        return StdSignature(
            pub_key="A9Xj0RNOvB6MsmBHdB4TzMUeGqLLcnXpMB8Nf1mhdy0p",
            signature=hashlib.sha256(sign_bytes).hexdigest(),
        )


# Address fixtures
@pytest.fixture
def addr() -> str:
    """Valid account address."""
    return ADDR


@pytest.fixture
def staking_addr() -> str:
    """Account address with delegations."""
    return STAKING_ADDR


@pytest.fixture
def val_addr() -> str:
    """Validator operator address of staking_addr."""
    return VAL_ADDR


@pytest.fixture
def proxy_addr() -> str:
    return PROXY_ADDR


@pytest.fixture
def product() -> str:
    return PRODUCT


@pytest.fixture
def invalid_addresses() -> List[str]:
    """Addresses that must be rejected."""
    return [
        "",
        ADDR[1:],
        ADDR[:-1] + ("a" if ADDR[-1] != "a" else "b"),
        VAL_ADDR,
        "cosmos1dcsxvxgj374dv3wt9szflf9nz6342juzzkjnlz",
    ]


# Client fixtures
@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(node_uri="http://localhost:26657", chain_id="okchain")


@pytest.fixture
def mock_base_client() -> MockBaseClient:
    return MockBaseClient()


@pytest.fixture
def client(client_config, mock_base_client) -> OKChainClient:
    """OKChainClient dispatching through the mock base client."""
    return OKChainClient(client_config, base_client=mock_base_client)


@pytest.fixture
def signer() -> FakeSigner:
    return FakeSigner()
