"""
Transaction-related models for OKChain client.

Immutable data structures for coins, messages, signed transactions and
broadcast results.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from ..utils import InvalidParamsError

_COIN_RE = re.compile(r"^(\d+(?:\.\d+)?)([a-z][a-z0-9]{0,15}(?:-[a-z0-9]{3,})?)$")


@dataclass(frozen=True)
class Coin:
    """Amount of a single denomination."""
    denom: str
    amount: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {"denom": self.denom, "amount": str(self.amount)}


def parse_coin(coin_str: str) -> Coin:
    """Parse a single coin string such as ``10.24okt``."""
    text = coin_str.strip() if isinstance(coin_str, str) else ""
    match = _COIN_RE.match(text)
    if not match:
        raise InvalidParamsError(f"failed. invalid coin expression: {coin_str!r}")

    amount_str, denom = match.groups()
    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise InvalidParamsError(f"failed. invalid coin amount: {amount_str!r}") from None

    if amount <= 0:
        raise InvalidParamsError(f"failed. coin amount must be positive: {coin_str!r}")
    return Coin(denom=denom, amount=amount)


def parse_coins(coins_str: str) -> List[Coin]:
    """
    Parse a comma separated coins string such as ``1okt,2.5btc-000``.

    Returns:
        Coins sorted by denomination

    Raises:
        InvalidParamsError: If the string is empty, malformed, non-positive or
            names a denomination twice
    """
    if not coins_str or not isinstance(coins_str, str):
        raise InvalidParamsError(f"failed. empty coins expression: {coins_str!r}")

    coins = [parse_coin(part) for part in coins_str.split(",")]
    denoms = [coin.denom for coin in coins]
    if len(set(denoms)) != len(denoms):
        raise InvalidParamsError(f"failed. duplicate denomination in {coins_str!r}")

    return sorted(coins, key=lambda coin: coin.denom)


@dataclass(frozen=True)
class Msg:
    """A transaction message: amino route type plus its JSON value."""
    type: str
    value: Dict[str, Any]


@dataclass(frozen=True)
class StdFee:
    """Transaction fee and gas limit."""
    amount: List[Coin]
    gas: int

    def to_dict(self) -> Dict[str, Any]:
        """Wire form; gas is encoded as a decimal string."""
        return {
            "amount": [c.to_dict() for c in self.amount],
            "gas": str(self.gas),
        }


@dataclass(frozen=True)
class StdSignature:
    """Signature produced by an external signer (base64 encoded fields)."""
    pub_key: str
    signature: str


@dataclass(frozen=True)
class StdTx:
    """Signed standard transaction."""
    msgs: List[Msg]
    fee: StdFee
    signatures: List[StdSignature]
    memo: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Wire form of the transaction."""
        return {
            "msg": [{"type": m.type, "value": m.value} for m in self.msgs],
            "fee": self.fee.to_dict(),
            "signatures": [
                {"pub_key": s.pub_key, "signature": s.signature} for s in self.signatures
            ],
            "memo": self.memo,
        }


@dataclass(frozen=True)
class Attribute:
    """Event attribute key/value pair."""
    key: str
    value: str


@dataclass(frozen=True)
class Event:
    """Event emitted while executing a transaction."""
    type: str
    attributes: List[Attribute] = field(default_factory=list)


@dataclass(frozen=True)
class TxResponse:
    """Result of broadcasting a transaction."""
    txhash: str
    height: int = 0
    code: int = 0
    data: str = ""
    raw_log: str = ""
    gas_wanted: int = 0
    gas_used: int = 0
    codespace: Optional[str] = None
    events: List[Event] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """Whether the node accepted the transaction."""
        return self.code == 0
