"""
OKChain Client - Python client for OKChain nodes.

This package provides an async client for querying an OKChain node's
backend, staking, dex, token, order and auth modules, and for building and
broadcasting signed transactions.
"""

from .base_client import BaseClient, KVPair, RPCBaseClient
from .client import OKChainClient, create_okchain_client
from .codec import Codec, DecodeError
from .http_client import HttpClientError, HttpClientClientError, HttpServerError, RPCError
from .models import (
    # Configuration
    BroadcastMode,
    ClientConfig,
    RetryConfig,
    # Backend
    Ticker,
    MatchResult,
    Order,
    Deal,
    Transaction,
    # Staking
    Validator,
    Delegator,
    Undelegation,
    DelegatorResponse,
    # Dex, token, order, auth
    TokenPair,
    AccountTokensInfo,
    BookRes,
    Account,
    # Transactions
    Coin,
    Msg,
    StdSignature,
    StdTx,
    TxResponse,
)
from .tx_builder import Signer, TxBuilder
from .utils import InvalidParamsError, Timestamp, get_order_ids_from_response

__all__ = [
    # Main Client
    "OKChainClient",
    "create_okchain_client",
    # Dispatch
    "BaseClient",
    "RPCBaseClient",
    "KVPair",
    "Codec",
    # Errors
    "InvalidParamsError",
    "DecodeError",
    "HttpClientError",
    "HttpClientClientError",
    "HttpServerError",
    "RPCError",
    # Configuration
    "BroadcastMode",
    "ClientConfig",
    "RetryConfig",
    # Records
    "Ticker",
    "MatchResult",
    "Order",
    "Deal",
    "Transaction",
    "Validator",
    "Delegator",
    "Undelegation",
    "DelegatorResponse",
    "Timestamp",
    "TokenPair",
    "AccountTokensInfo",
    "BookRes",
    "Account",
    # Transactions
    "Coin",
    "Msg",
    "StdSignature",
    "StdTx",
    "TxResponse",
    "Signer",
    "TxBuilder",
    "get_order_ids_from_response",
]
