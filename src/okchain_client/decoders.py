"""
Response decoders for OKChain client.

Turns parsed response documents into typed records. Every field is checked:
a missing key, a wrong type or a malformed decimal raises DecodeError rather
than being replaced by a default.
"""

import re
from decimal import Decimal
from typing import Any, Callable, Dict, List, TypeVar

from .codec import DecodeError
from .constants import SUCCESS_CODE
from .http_client import RPCError
from .models.account import Account, AccountTokensInfo, CoinInfo
from .models.market import BookRes, BookResItem, MatchResult, Ticker, TokenPair
from .models.orders import Deal, Order, Transaction
from .models.staking import Delegator, Description, Undelegation, Validator
from .models.tx import Coin
from .utils import parse_rfc3339

T = TypeVar("T")

_DECIMAL_RE = re.compile(r"\A-?[0-9]+(\.[0-9]+)?\Z")
_INT_RE = re.compile(r"\A-?[0-9]+\Z")


def require_field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"expected object holding {key!r}, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"missing field {key!r}")
    return data[key]


def to_decimal(value: Any, name: str = "value") -> Decimal:
    """Convert a JSON string or number into an exact Decimal.

    Strings must be plain decimal literals such as ``-12.5``; exponents,
    underscores, signs other than a leading ``-`` and whitespace are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, Decimal)):
        raise DecodeError(f"field {name!r}: expected decimal, got {value!r}")
    if isinstance(value, str):
        if not _DECIMAL_RE.match(value):
            raise DecodeError(f"field {name!r}: invalid decimal {value!r}")
        return Decimal(value)
    result = value if isinstance(value, Decimal) else Decimal(value)
    if not result.is_finite():
        raise DecodeError(f"field {name!r}: invalid decimal {value!r}")
    return result


def to_int(value: Any, name: str = "value") -> int:
    """Convert a JSON integer, or an integer written as a plain digit string, into int."""
    if isinstance(value, bool):
        raise DecodeError(f"field {name!r}: expected integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_RE.match(value):
        return int(value)
    raise DecodeError(f"field {name!r}: expected integer, got {value!r}")


def to_str(value: Any, name: str = "value") -> str:
    if not isinstance(value, str):
        raise DecodeError(f"field {name!r}: expected string, got {value!r}")
    return value


def to_bool(value: Any, name: str = "value") -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"field {name!r}: expected boolean, got {value!r}")
    return value


def to_time(value: Any, name: str = "value"):
    try:
        return parse_rfc3339(value)
    except ValueError as e:
        raise DecodeError(f"field {name!r}: {e}") from None


def to_list(value: Any, name: str = "value") -> list:
    """A JSON array; ``null`` is read as an empty list."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"field {name!r}: expected array, got {type(value).__name__}")
    return value


def decode_records(items: Any, decoder: Callable[[Dict[str, Any]], T], shape: str) -> List[T]:
    """Decode every element of a JSON array with ``decoder``."""
    records = []
    for index, item in enumerate(to_list(items, shape)):
        try:
            records.append(decoder(item))
        except DecodeError as e:
            raise DecodeError(f"failed to decode {shape}[{index}]: {e}") from e
    return records


def unwrap_base_response(document: Any) -> Any:
    """
    Unwrap ``{"code", "msg", "detail_msg", "data"}`` backend responses.

    Raises:
        RPCError: If the response carries a non-zero code
        DecodeError: If the document is not a base response
    """
    code = to_int(require_field(document, "code"), "code")
    if code != SUCCESS_CODE:
        msg = document.get("msg", "")
        detail = document.get("detail_msg", "")
        raise RPCError(f"query failed with code {code}: {msg} {detail}".strip(), code=code)
    return require_field(document, "data")


def unwrap_list_response(document: Any) -> list:
    """Unwrap a paginated backend response into its record array."""
    data = unwrap_base_response(document)
    if data is None:
        return []
    return to_list(require_field(data, "data"), "data")


def decode_candles(data: Any) -> List[List[str]]:
    """Candles are an array of string rows, kept verbatim."""
    candles = []
    for row in to_list(data, "candles"):
        candles.append([to_str(cell, "candle") for cell in to_list(row, "candle")])
    return candles


def decode_ticker(data: Dict[str, Any]) -> Ticker:
    return Ticker(
        symbol=to_str(require_field(data, "symbol"), "symbol"),
        product=to_str(require_field(data, "product"), "product"),
        timestamp=to_str(require_field(data, "timestamp"), "timestamp"),
        open=to_decimal(require_field(data, "open"), "open"),
        close=to_decimal(require_field(data, "close"), "close"),
        high=to_decimal(require_field(data, "high"), "high"),
        low=to_decimal(require_field(data, "low"), "low"),
        price=to_decimal(require_field(data, "price"), "price"),
        volume=to_decimal(require_field(data, "volume"), "volume"),
        change=to_decimal(require_field(data, "change"), "change"),
    )


def decode_deal(data: Dict[str, Any]) -> Deal:
    return Deal(
        timestamp=to_int(require_field(data, "timestamp"), "timestamp"),
        block_height=to_int(require_field(data, "block_height"), "block_height"),
        order_id=to_str(require_field(data, "order_id"), "order_id"),
        sender=to_str(require_field(data, "sender"), "sender"),
        product=to_str(require_field(data, "product"), "product"),
        side=to_str(require_field(data, "side"), "side"),
        price=to_decimal(require_field(data, "price"), "price"),
        quantity=to_decimal(require_field(data, "quantity"), "quantity"),
        fee=to_str(require_field(data, "fee"), "fee"),
    )


def decode_order(data: Dict[str, Any]) -> Order:
    return Order(
        tx_hash=to_str(require_field(data, "txhash"), "txhash"),
        order_id=to_str(require_field(data, "order_id"), "order_id"),
        sender=to_str(require_field(data, "sender"), "sender"),
        product=to_str(require_field(data, "product"), "product"),
        side=to_str(require_field(data, "side"), "side"),
        price=to_decimal(require_field(data, "price"), "price"),
        quantity=to_decimal(require_field(data, "quantity"), "quantity"),
        status=to_int(require_field(data, "status"), "status"),
        filled_avg_price=to_decimal(require_field(data, "filled_avg_price"), "filled_avg_price"),
        remain_quantity=to_decimal(require_field(data, "remain_quantity"), "remain_quantity"),
        timestamp=to_int(require_field(data, "timestamp"), "timestamp"),
    )


def decode_match_result(data: Dict[str, Any]) -> MatchResult:
    return MatchResult(
        timestamp=to_int(require_field(data, "timestamp"), "timestamp"),
        block_height=to_int(require_field(data, "block_height"), "block_height"),
        product=to_str(require_field(data, "product"), "product"),
        price=to_decimal(require_field(data, "price"), "price"),
        quantity=to_decimal(require_field(data, "quantity"), "quantity"),
    )


def decode_transaction(data: Dict[str, Any]) -> Transaction:
    return Transaction(
        tx_hash=to_str(require_field(data, "txhash"), "txhash"),
        type=to_int(require_field(data, "type"), "type"),
        address=to_str(require_field(data, "address"), "address"),
        symbol=to_str(require_field(data, "symbol"), "symbol"),
        side=to_int(require_field(data, "side"), "side"),
        quantity=to_decimal(require_field(data, "quantity"), "quantity"),
        fee=to_str(require_field(data, "fee"), "fee"),
        timestamp=to_int(require_field(data, "timestamp"), "timestamp"),
    )


def decode_token_pair(data: Dict[str, Any]) -> TokenPair:
    deposits = require_field(data, "deposits")
    return TokenPair(
        base_asset_symbol=to_str(require_field(data, "base_asset_symbol"), "base_asset_symbol"),
        quote_asset_symbol=to_str(require_field(data, "quote_asset_symbol"), "quote_asset_symbol"),
        price=to_decimal(require_field(data, "price"), "price"),
        max_price_digit=to_int(require_field(data, "max_price_digit"), "max_price_digit"),
        max_quantity_digit=to_int(require_field(data, "max_size_digit"), "max_size_digit"),
        min_quantity=to_decimal(require_field(data, "min_quantity"), "min_quantity"),
        token_pair_id=to_int(require_field(data, "token_pair_id"), "token_pair_id"),
        delisting=to_bool(require_field(data, "delisting"), "delisting"),
        owner=to_str(require_field(data, "owner"), "owner"),
        deposits=to_decimal(require_field(deposits, "amount"), "deposits.amount"),
        block_height=to_int(require_field(data, "block_height"), "block_height"),
    )


def _decode_book_item(data: Dict[str, Any]) -> BookResItem:
    return BookResItem(
        price=to_decimal(require_field(data, "price"), "price"),
        quantity=to_decimal(require_field(data, "quantity"), "quantity"),
    )


def decode_book_res(data: Dict[str, Any]) -> BookRes:
    return BookRes(
        asks=decode_records(require_field(data, "asks"), _decode_book_item, "asks"),
        bids=decode_records(require_field(data, "bids"), _decode_book_item, "bids"),
    )


def decode_coin(data: Dict[str, Any]) -> Coin:
    return Coin(
        denom=to_str(require_field(data, "denom"), "denom"),
        amount=to_decimal(require_field(data, "amount"), "amount"),
    )


def decode_account(data: Dict[str, Any]) -> Account:
    """Decode an account, with or without the ``{"type", "value"}`` wrapper."""
    if isinstance(data, dict) and "value" in data and "type" in data:
        data = data["value"]
    return Account(
        address=to_str(require_field(data, "address"), "address"),
        coins=decode_records(data.get("coins"), decode_coin, "coins"),
        account_number=to_int(require_field(data, "account_number"), "account_number"),
        sequence=to_int(require_field(data, "sequence"), "sequence"),
    )


def _decode_coin_info(data: Dict[str, Any]) -> CoinInfo:
    return CoinInfo(
        symbol=to_str(require_field(data, "symbol"), "symbol"),
        available=to_decimal(require_field(data, "available"), "available"),
        freeze=to_decimal(require_field(data, "freeze"), "freeze"),
        locked=to_decimal(require_field(data, "locked"), "locked"),
    )


def decode_account_tokens(data: Dict[str, Any]) -> AccountTokensInfo:
    return AccountTokensInfo(
        address=to_str(require_field(data, "address"), "address"),
        currencies=decode_records(require_field(data, "currencies"), _decode_coin_info, "currencies"),
    )


def decode_validator(data: Dict[str, Any]) -> Validator:
    description = require_field(data, "description")
    return Validator(
        operator_address=to_str(require_field(data, "operator_address"), "operator_address"),
        cons_pub_key=to_str(require_field(data, "consensus_pubkey"), "consensus_pubkey"),
        jailed=to_bool(require_field(data, "jailed"), "jailed"),
        status=to_int(require_field(data, "status"), "status"),
        delegator_shares=to_decimal(require_field(data, "delegator_shares"), "delegator_shares"),
        description=Description(
            moniker=to_str(require_field(description, "moniker"), "moniker"),
            identity=to_str(description.get("identity", ""), "identity"),
            website=to_str(description.get("website", ""), "website"),
            details=to_str(description.get("details", ""), "details"),
        ),
        unbonding_height=to_int(require_field(data, "unbonding_height"), "unbonding_height"),
        unbonding_completion_time=to_time(require_field(data, "unbonding_time"), "unbonding_time"),
        min_self_delegation=to_decimal(require_field(data, "min_self_delegation"), "min_self_delegation"),
    )


def decode_delegator(data: Dict[str, Any]) -> Delegator:
    return Delegator(
        delegator_address=to_str(require_field(data, "delegator_address"), "delegator_address"),
        validator_addresses=[
            to_str(addr, "validator_address")
            for addr in to_list(require_field(data, "validator_address"), "validator_address")
        ],
        shares=to_decimal(require_field(data, "shares"), "shares"),
        tokens=to_decimal(require_field(data, "tokens"), "tokens"),
        is_proxy=to_bool(require_field(data, "is_proxy"), "is_proxy"),
        total_delegated_tokens=to_decimal(
            require_field(data, "total_delegated_tokens"), "total_delegated_tokens"
        ),
        proxy_address=to_str(require_field(data, "proxy_address"), "proxy_address"),
    )


def decode_undelegation(data: Dict[str, Any]) -> Undelegation:
    return Undelegation(
        delegator_address=to_str(require_field(data, "delegator_address"), "delegator_address"),
        quantity=to_decimal(require_field(data, "quantity"), "quantity"),
        completion_time=to_time(require_field(data, "completion_time"), "completion_time"),
    )
