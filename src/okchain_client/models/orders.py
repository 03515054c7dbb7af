"""
Order-related models for OKChain client.

Immutable data structures for orders, deals and transaction records
returned by the backend module.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Order:
    """Order record."""
    tx_hash: str
    order_id: str
    sender: str
    product: str
    side: str  # "BUY" or "SELL"
    price: Decimal
    quantity: Decimal
    status: int
    filled_avg_price: Decimal
    remain_quantity: Decimal
    timestamp: int  # milliseconds


@dataclass(frozen=True)
class Deal:
    """Deal (filled part of an order) record."""
    timestamp: int  # milliseconds
    block_height: int
    order_id: str
    sender: str
    product: str
    side: str
    price: Decimal
    quantity: Decimal
    fee: str  # coin expression, e.g. "0.00100000btc-000"


@dataclass(frozen=True)
class Transaction:
    """Transaction record of an address."""
    tx_hash: str
    type: int  # 1 transfer, 2 new order, 3 cancel order
    address: str
    symbol: str
    side: int
    quantity: Decimal
    fee: str
    timestamp: int  # milliseconds
