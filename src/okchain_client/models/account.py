"""
Account-related models for OKChain client.

Immutable data structures for account and token balance information.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from .tx import Coin


@dataclass(frozen=True)
class Account:
    """On-chain account, as needed for signing transactions."""
    address: str
    coins: List[Coin] = field(default_factory=list)
    account_number: int = 0
    sequence: int = 0


@dataclass(frozen=True)
class CoinInfo:
    """Balance of one token held by an account."""
    symbol: str
    available: Decimal
    freeze: Decimal
    locked: Decimal


@dataclass(frozen=True)
class AccountTokensInfo:
    """Token balances of an account."""
    address: str
    currencies: List[CoinInfo] = field(default_factory=list)
