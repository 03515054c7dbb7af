"""
In-memory BaseClient for tests.

``MockBaseClient`` answers only the calls it was told to expect, in any order,
and fails loudly on anything else. The ``build_*_bytes`` helpers produce the
exact payloads a node would return for each query.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from .base_client import KVPair
from .codec import Codec, encode_uvarint
from .models.config import BroadcastMode
from .models.tx import TxResponse

Outcome = Union[bytes, List[KVPair], BaseException]


class MockBaseClient:
    """BaseClient double returning canned bytes for expected calls."""

    def __init__(self, codec: Optional[Codec] = None):
        self._codec = codec or Codec()
        self._expected: List[Tuple[Tuple[Any, ...], Outcome]] = []
        self.calls: List[Tuple[Any, ...]] = []
        self.broadcasts: List[Tuple[bytes, BroadcastMode]] = []
        self.broadcast_result = TxResponse(txhash="MOCKHASH")

    def get_codec(self) -> Codec:
        return self._codec

    def expect_query(self, path: str, data: bytes, result: Outcome) -> None:
        """Answer ``query(path, data)`` with ``result`` (raised if an exception)."""
        self._expected.append((("query", path, bytes(data)), result))

    def expect_query_store(self, key: bytes, store_name: str, kind: str, result: Outcome) -> None:
        self._expected.append((("query_store", bytes(key), store_name, kind), result))

    def expect_query_subspace(self, prefix: bytes, store_name: str, result: Outcome) -> None:
        self._expected.append((("query_subspace", bytes(prefix), store_name), result))

    def assert_all_consumed(self) -> None:
        if self._expected:
            pending = [call for call, _ in self._expected]
            raise AssertionError(f"expected calls were never made: {pending}")

    def _answer(self, call: Tuple[Any, ...]) -> Outcome:
        self.calls.append(call)
        for index, (expected, result) in enumerate(self._expected):
            if expected == call:
                del self._expected[index]
                if isinstance(result, BaseException):
                    raise result
                return result
        raise AssertionError(f"unexpected call: {call}")

    async def query(self, path: str, data: bytes) -> bytes:
        return self._answer(("query", path, bytes(data)))

    async def query_store(self, key: bytes, store_name: str, kind: str) -> bytes:
        return self._answer(("query_store", bytes(key), store_name, kind))

    async def query_subspace(self, prefix: bytes, store_name: str) -> List[KVPair]:
        return self._answer(("query_subspace", bytes(prefix), store_name))

    async def broadcast(self, tx_bytes: bytes, mode: BroadcastMode) -> TxResponse:
        self.broadcasts.append((bytes(tx_bytes), mode))
        if isinstance(self.broadcast_result, BaseException):
            raise self.broadcast_result
        return self.broadcast_result


# Fixture payloads. Decimal values are written as raw JSON text so that the
# decoded Decimal can be compared with the literal.

def _base_response(data_json: str) -> bytes:
    return f'{{"code":0,"msg":"","detail_msg":"","data":{data_json}}}'.encode("utf-8")


def _list_response(items_json: List[str]) -> bytes:
    paginate = '{"page":1,"per_page":50,"total":%d}' % len(items_json)
    return _base_response(f'{{"paginate":{paginate},"data":[{",".join(items_json)}]}}')


def _length_prefixed(body: str) -> bytes:
    raw = body.encode("utf-8")
    return encode_uvarint(len(raw)) + raw


def build_error_response_bytes(code: int, msg: str) -> bytes:
    return f'{{"code":{code},"msg":"{msg}","detail_msg":"","data":null}}'.encode("utf-8")


def build_candles_bytes(rows: List[List[str]]) -> bytes:
    body = ",".join("[" + ",".join(f'"{cell}"' for cell in row) + "]" for row in rows)
    return _base_response(f"[{body}]")


def build_tickers_bytes(
    symbol: str = "btc-000_okt",
    product: str = "btc-000_okt",
    timestamp: str = "2019-10-24 08:00:00",
    price: str = "1024.1024",
    count: int = 1,
) -> bytes:
    ticker = (
        f'{{"symbol":"{symbol}","product":"{product}","timestamp":"{timestamp}",'
        f'"open":{price},"close":{price},"high":{price},"low":{price},'
        f'"price":{price},"volume":{price},"change":{price}}}'
    )
    return _base_response("[" + ",".join([ticker] * count) + "]")


def build_deals_bytes(
    sender: str,
    product: str = "btc-000_okt",
    side: str = "BUY",
    price: str = "1024.1024",
    quantity: str = "1024.1024",
    timestamp: int = 1571904000000,
    count: int = 1,
) -> bytes:
    deal = (
        f'{{"timestamp":{timestamp},"block_height":1024,"order_id":"ID0000001024-1",'
        f'"sender":"{sender}","product":"{product}","side":"{side}",'
        f'"price":{price},"quantity":{quantity},"fee":"0.00100000okt"}}'
    )
    return _list_response([deal] * count)


def build_orders_bytes(
    sender: str,
    product: str = "btc-000_okt",
    side: str = "BUY",
    price: str = "1024.1024",
    quantity: str = "1024.1024",
    timestamp: int = 1571904000000,
    count: int = 1,
) -> bytes:
    order = (
        f'{{"txhash":"TXHASH1024","order_id":"ID0000001024-1","sender":"{sender}",'
        f'"product":"{product}","side":"{side}","price":{price},"quantity":{quantity},'
        f'"status":0,"filled_avg_price":"0","remain_quantity":{quantity},'
        f'"timestamp":{timestamp}}}'
    )
    return _list_response([order] * count)


def build_match_result_bytes(
    product: str = "btc-000_okt",
    price: str = "1024.1024",
    quantity: str = "1024.1024",
    timestamp: int = 1571904000000,
    count: int = 1,
) -> bytes:
    match = (
        f'{{"timestamp":{timestamp},"block_height":1024,"product":"{product}",'
        f'"price":{price},"quantity":{quantity}}}'
    )
    return _list_response([match] * count)


def build_transactions_bytes(
    address: str,
    symbol: str = "okt",
    quantity: str = "1024.1024",
    timestamp: int = 1571904000000,
    count: int = 1,
) -> bytes:
    tx = (
        f'{{"txhash":"TXHASH1024","type":1,"address":"{address}","symbol":"{symbol}",'
        f'"side":2,"quantity":{quantity},"fee":"0.01000000okt","timestamp":{timestamp}}}'
    )
    return _list_response([tx] * count)


def build_token_pairs_bytes(owner: str, price: str = "1024.1024", count: int = 1) -> bytes:
    pair = (
        f'{{"base_asset_symbol":"btc-000","quote_asset_symbol":"okt","price":{price},'
        f'"max_price_digit":8,"max_size_digit":8,"min_quantity":"0.00000001",'
        f'"token_pair_id":1,"delisting":false,"owner":"{owner}",'
        f'"deposits":{{"denom":"okt","amount":"0"}},"block_height":1024}}'
    )
    return _list_response([pair] * count)


def build_account_tokens_bytes(address: str, available: str = "1024.1024") -> bytes:
    return (
        f'{{"address":"{address}","currencies":[{{"symbol":"okt","available":"{available}",'
        f'"freeze":"0","locked":"0"}}]}}'
    ).encode("utf-8")


def build_depth_book_bytes(price: str = "1024.1024", quantity: str = "1024.1024") -> bytes:
    level = f'{{"price":"{price}","quantity":"{quantity}"}}'
    return f'{{"asks":[{level}],"bids":[{level}]}}'.encode("utf-8")


def build_account_bytes(address: str, account_number: int = 1, sequence: int = 0) -> bytes:
    return (
        f'{{"type":"okchain/EthAccount","value":{{"address":"{address}",'
        f'"coins":[{{"denom":"okt","amount":"1024.1024"}}],'
        f'"account_number":"{account_number}","sequence":"{sequence}"}}}}'
    ).encode("utf-8")


def _validator_json(operator_address: str, shares: str, moniker: str) -> str:
    return (
        f'{{"operator_address":"{operator_address}",'
        f'"consensus_pubkey":"okchainvalconspub1zcjduepq0000000000000000",'
        f'"jailed":false,"status":2,"delegator_shares":"{shares}",'
        f'"description":{{"moniker":"{moniker}","identity":"","website":"","details":""}},'
        f'"unbonding_height":0,"unbonding_time":"1970-01-01T00:00:00Z",'
        f'"min_self_delegation":"0.001"}}'
    )


def build_validator_bytes(
    operator_address: str, shares: str = "1024.1024", moniker: str = "okchain"
) -> bytes:
    """Length-prefixed validator as stored under the validators key."""
    return _length_prefixed(_validator_json(operator_address, shares, moniker))


def build_delegator_bytes(
    delegator_address: str,
    validator_addresses: List[str],
    shares: str = "1024.1024",
    tokens: str = "1024.1024",
    proxy_address: str = "",
) -> bytes:
    """Length-prefixed delegator as stored under the delegator key."""
    validators = ",".join(f'"{addr}"' for addr in validator_addresses)
    return _length_prefixed(
        f'{{"delegator_address":"{delegator_address}","validator_address":[{validators}],'
        f'"shares":"{shares}","tokens":"{tokens}","is_proxy":false,'
        f'"total_delegated_tokens":"0","proxy_address":"{proxy_address}"}}'
    )


def build_undelegation_bytes(
    delegator_address: str,
    quantity: str = "1024.1024",
    completion_time: str = "2019-10-24T08:00:00.123456789Z",
) -> bytes:
    return (
        f'{{"delegator_address":"{delegator_address}","quantity":"{quantity}",'
        f'"completion_time":"{completion_time}"}}'
    ).encode("utf-8")


def build_kv_pairs(values: Dict[bytes, bytes]) -> List[KVPair]:
    return [KVPair(key=key, value=value) for key, value in values.items()]
