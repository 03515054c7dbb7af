"""
Market-related models for OKChain client.

Immutable data structures for tickers, trade records, depth books and
listed token pairs.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class Ticker:
    """24h ticker of a product."""
    symbol: str
    product: str
    timestamp: str
    open: Decimal
    close: Decimal
    high: Decimal
    low: Decimal
    price: Decimal
    volume: Decimal
    change: Decimal


@dataclass(frozen=True)
class MatchResult:
    """A match (trade) record of a product."""
    timestamp: int  # milliseconds
    block_height: int
    product: str
    price: Decimal
    quantity: Decimal


@dataclass(frozen=True)
class BookResItem:
    """One price level of the depth book."""
    price: Decimal
    quantity: Decimal


@dataclass(frozen=True)
class BookRes:
    """Depth book of a product."""
    asks: List[BookResItem] = field(default_factory=list)
    bids: List[BookResItem] = field(default_factory=list)


@dataclass(frozen=True)
class TokenPair:
    """Token pair listed on the dex."""
    base_asset_symbol: str
    quote_asset_symbol: str
    price: Decimal
    max_price_digit: int
    max_quantity_digit: int
    min_quantity: Decimal
    token_pair_id: int
    delisting: bool
    owner: str
    deposits: Decimal
    block_height: int

    @property
    def product(self) -> str:
        """Product name, e.g. ``btc-000_okt``."""
        return f"{self.base_asset_symbol}_{self.quote_asset_symbol}"
