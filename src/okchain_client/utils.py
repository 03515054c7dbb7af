"""
Utility functions for OKChain client.

Validation helpers for caller input, address and time conversion, and small
helpers for working with transaction responses.
"""

import json
import logging
import re
import time
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

import bech32

from .constants import (
    ACC_ADDRESS_PREFIX,
    ADDRESS_LENGTH,
    SIDE_BUY,
    SIDE_SELL,
    VAL_ADDRESS_PREFIX,
)

logger = logging.getLogger(__name__)

_RFC3339_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


class InvalidParamsError(ValueError):
    """Raised when caller input fails local validation."""
    pass


def _plain(value: datetime) -> datetime:
    return datetime(
        value.year, value.month, value.day, value.hour, value.minute, value.second,
        value.microsecond, tzinfo=value.tzinfo, fold=value.fold,
    )


def _restore_timestamp(parts: tuple, fold: int, nanosecond: int) -> "Timestamp":
    return Timestamp(*parts, fold=fold, nanosecond=nanosecond)


class Timestamp(datetime):
    """
    Datetime that also keeps the sub-microsecond digits of a chain timestamp.

    ``nanosecond`` holds the three digits after the microsecond (0 to 999).
    Equality, ordering and hashing include it; a plain datetime compares as
    if its nanosecond were 0.
    """

    def __new__(cls, *args, nanosecond: int = 0, **kwargs):
        if isinstance(nanosecond, bool) or not isinstance(nanosecond, int) or not 0 <= nanosecond < 1000:
            raise ValueError(f"nanosecond must be in 0..999, got {nanosecond!r}")
        self = super().__new__(cls, *args, **kwargs)
        self._nanosecond = nanosecond
        return self

    @property
    def nanosecond(self) -> int:
        return self._nanosecond

    def _key(self):
        return (_plain(self), self._nanosecond)

    @staticmethod
    def _other_key(other):
        if not isinstance(other, datetime):
            return None
        return (_plain(other), getattr(other, "nanosecond", 0))

    def __eq__(self, other):
        other_key = self._other_key(other)
        return NotImplemented if other_key is None else self._key() == other_key

    def __ne__(self, other):
        other_key = self._other_key(other)
        return NotImplemented if other_key is None else self._key() != other_key

    def __lt__(self, other):
        other_key = self._other_key(other)
        return NotImplemented if other_key is None else self._key() < other_key

    def __le__(self, other):
        other_key = self._other_key(other)
        return NotImplemented if other_key is None else self._key() <= other_key

    def __gt__(self, other):
        other_key = self._other_key(other)
        return NotImplemented if other_key is None else self._key() > other_key

    def __ge__(self, other):
        other_key = self._other_key(other)
        return NotImplemented if other_key is None else self._key() >= other_key

    def __hash__(self):
        if not self._nanosecond:
            return hash(_plain(self))
        return hash(self._key())

    def __reduce_ex__(self, protocol):
        parts = (
            self.year, self.month, self.day, self.hour, self.minute, self.second,
            self.microsecond, self.tzinfo,
        )
        return (_restore_timestamp, (parts, self.fold, self._nanosecond))

    def __repr__(self):
        return f"Timestamp({format_rfc3339(self)!r})"


def validate_product(product: str) -> bool:
    """Validate product (trading pair) format, e.g. ``btc-000_okt``."""
    if not product or not isinstance(product, str):
        return False

    base, sep, quote = product.partition("_")
    if not sep or not base or not quote:
        return False
    return product.replace("-", "").replace("_", "").replace(".", "").isalnum()


def validate_side(side: str) -> bool:
    """Validate order side. An empty side means both sides."""
    return side in ("", SIDE_BUY, SIDE_SELL)


def validate_quantity(quantity: Union[Decimal, float, str]) -> bool:
    """Validate quantity is positive."""
    try:
        decimal_quantity = Decimal(str(quantity))
        return decimal_quantity.is_finite() and decimal_quantity > 0
    except (ValueError, TypeError, InvalidOperation):
        return False


def validate_price(price: Union[Decimal, float, str]) -> bool:
    """Validate price is positive."""
    try:
        decimal_price = Decimal(str(price))
        return decimal_price.is_finite() and decimal_price > 0
    except (ValueError, TypeError, InvalidOperation):
        return False


def validate_url(url: str) -> bool:
    """Validate node URL format."""
    if not url or not isinstance(url, str):
        return False
    return url.startswith(("http://", "https://")) and len(url.split("://", 1)[1]) > 0


def _decode_bech32(address: str, prefix: str) -> Optional[bytes]:
    if not address or not isinstance(address, str):
        return None

    hrp, data = bech32.bech32_decode(address)
    if hrp != prefix or data is None:
        return None

    decoded = bech32.convertbits(data, 5, 8, False)
    if decoded is None or len(decoded) != ADDRESS_LENGTH:
        return None
    return bytes(decoded)


def validate_address(address: str, prefix: str = ACC_ADDRESS_PREFIX) -> bool:
    """Validate a bech32 address against the expected human readable prefix."""
    return _decode_bech32(address, prefix) is not None


def acc_address_to_bytes(address: str) -> bytes:
    """Decode an account address into its raw 20 bytes."""
    raw = _decode_bech32(address, ACC_ADDRESS_PREFIX)
    if raw is None:
        raise InvalidParamsError(f"failed. invalid address: {address}")
    return raw


def val_address_to_bytes(address: str) -> bytes:
    """Decode a validator operator address into its raw 20 bytes."""
    raw = _decode_bech32(address, VAL_ADDRESS_PREFIX)
    if raw is None:
        raise InvalidParamsError(f"failed. invalid validator address: {address}")
    return raw


def bytes_to_address(raw: bytes, prefix: str = ACC_ADDRESS_PREFIX) -> str:
    """Encode raw address bytes as bech32."""
    if len(raw) != ADDRESS_LENGTH:
        raise ValueError(f"address must be {ADDRESS_LENGTH} bytes, got {len(raw)}")
    return bech32.bech32_encode(prefix, bech32.convertbits(list(raw), 8, 5))


def check_product(product: str) -> None:
    """Raise InvalidParamsError unless product is a well-formed trading pair."""
    if not validate_product(product):
        raise InvalidParamsError(f"failed. invalid product: {product!r}")


def check_side(side: str) -> None:
    """Raise InvalidParamsError unless side is empty, BUY or SELL."""
    if not validate_side(side):
        raise InvalidParamsError(f"failed. invalid side: {side!r}")


def check_paging(start: int, end: int, page: int, per_page: int) -> None:
    """Check time range and pagination values supplied by the caller.

    Raises:
        InvalidParamsError: If any value is negative or start is after end
    """
    for name, value in (("start", start), ("end", end), ("page", page), ("per_page", per_page)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidParamsError(f"failed. {name} must be an integer, got {value!r}")
        if value < 0:
            raise InvalidParamsError(f"failed. {name} is not allowed to be negative: {value}")

    if start > end:
        raise InvalidParamsError(f"failed. start time {start} is later than end time {end}")


def current_unix_time() -> int:
    """Current time in unix seconds."""
    return int(time.time())


def parse_rfc3339(value: str) -> Timestamp:
    """Parse an RFC3339 timestamp into a UTC Timestamp.

    Up to nine fractional digits are kept exactly; more than nine is an error.
    """
    match = _RFC3339_RE.match(value) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"invalid RFC3339 timestamp: {value!r}")

    base, fraction, zone = match.groups()
    if fraction and len(fraction) > 9:
        raise ValueError(f"RFC3339 timestamp finer than nanoseconds: {value!r}")

    digits = (fraction or "").ljust(9, "0")
    offset = "+00:00" if zone == "Z" else zone
    moment = datetime.fromisoformat(f"{base}{offset}").astimezone(timezone.utc)
    return Timestamp(
        moment.year, moment.month, moment.day, moment.hour, moment.minute, moment.second,
        int(digits[:6]), tzinfo=timezone.utc, nanosecond=int(digits[6:]),
    )


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC3339 in UTC with trailing zeros trimmed."""
    nanos = value.microsecond * 1000 + getattr(value, "nanosecond", 0)
    value = _plain(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)

    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if nanos:
        text += f".{nanos:09d}".rstrip("0")
    return text + "Z"


def get_order_ids_from_response(tx_response) -> List[str]:
    """
    Collect order IDs from the ``orders`` attributes of a transaction response.

    Attributes that cannot be decoded are logged and skipped.

    Args:
        tx_response: TxResponse returned by a broadcast

    Returns:
        Order IDs in event order
    """
    order_ids = []
    for event in tx_response.events:
        if event.type != "message":
            continue

        for attribute in event.attributes:
            if attribute.key != "orders":
                continue

            try:
                order_results = json.loads(attribute.value)
                ids = [result["orderid"] for result in order_results]
            except (ValueError, TypeError, KeyError) as e:
                logger.error(f"Failed to unmarshal order results {attribute.value!r}: {e}")
                continue

            order_ids.extend(ids)

    return order_ids
