"""
Data models for OKChain client.

This package contains all data structures used throughout the OKChain client,
following the state-first principle with immutable data structures.
"""

from .config import BroadcastMode, ClientConfig, RetryConfig
from .market import Ticker, MatchResult, BookRes, BookResItem, TokenPair
from .orders import Order, Deal, Transaction
from .account import Account, AccountTokensInfo, CoinInfo
from .staking import Description, Validator, Delegator, Undelegation, DelegatorResponse
from .tx import (
    Attribute,
    Coin,
    Event,
    Msg,
    StdFee,
    StdSignature,
    StdTx,
    TxResponse,
    parse_coin,
    parse_coins,
)

__all__ = [
    # Configuration
    "BroadcastMode",
    "ClientConfig",
    "RetryConfig",
    # Market
    "Ticker",
    "MatchResult",
    "BookRes",
    "BookResItem",
    "TokenPair",
    # Orders
    "Order",
    "Deal",
    "Transaction",
    # Account
    "Account",
    "AccountTokensInfo",
    "CoinInfo",
    # Staking
    "Description",
    "Validator",
    "Delegator",
    "Undelegation",
    "DelegatorResponse",
    # Transactions
    "Attribute",
    "Coin",
    "Event",
    "Msg",
    "StdFee",
    "StdSignature",
    "StdTx",
    "TxResponse",
    "parse_coin",
    "parse_coins",
]
