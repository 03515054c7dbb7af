"""
Backend module client.

Queries the node's indexed market data: candles, tickers, deals, orders,
match records and per-address transaction history. Caller input is validated
before anything is sent to the node.
"""

import logging
from typing import List

from ..constants import (
    CANDLE_GRANULARITIES,
    CANDLES_PATH,
    CLOSED_ORDERS_PATH,
    DEALS_PATH,
    DEFAULT_TICKERS_COUNT,
    MAX_CANDLES_SIZE,
    OPEN_ORDERS_PATH,
    RECENT_TX_RECORD_PATH,
    TICKERS_PATH,
    TRANSACTIONS_PATH,
)
from ..decoders import (
    decode_candles,
    decode_deal,
    decode_match_result,
    decode_order,
    decode_records,
    decode_ticker,
    decode_transaction,
    unwrap_base_response,
    unwrap_list_response,
)
from ..models.market import MatchResult, Ticker
from ..models.orders import Deal, Order, Transaction
from ..models.params import (
    new_query_deals_params,
    new_query_klines_params,
    new_query_match_params,
    new_query_order_list_params,
    new_query_ticker_params,
    new_query_tx_list_params,
)
from ..utils import (
    InvalidParamsError,
    check_paging,
    check_product,
    check_side,
    validate_address,
)
from .base import ModuleClient

logger = logging.getLogger(__name__)


def _check_address(addr: str) -> None:
    if not validate_address(addr):
        raise InvalidParamsError(f"failed. invalid address: {addr}")


def _check_query_orders_params(
    addr: str, product: str, side: str, start: int, end: int, page: int, per_page: int
) -> None:
    _check_address(addr)
    check_product(product)
    check_side(side)
    check_paging(start, end, page, per_page)


class BackendClient(ModuleClient):
    """Client for the ``backend`` module queries."""

    name = "backend"

    async def query_candles(self, product: str, granularity: int, size: int) -> List[List[str]]:
        """
        Get candle (kline) rows of a product.

        Args:
            product: Product name, e.g. ``btc-000_okt``
            granularity: Candle width in seconds, one of CANDLE_GRANULARITIES
            size: Number of candles, 1 to 1000

        Returns:
            Candle rows as strings, in the order the node returns them
        """
        check_product(product)
        if granularity not in CANDLE_GRANULARITIES:
            raise InvalidParamsError(
                f"failed. invalid granularity: {granularity}. Valid granularities are: {list(CANDLE_GRANULARITIES)}"
            )
        if not isinstance(size, int) or size <= 0 or size > MAX_CANDLES_SIZE:
            raise InvalidParamsError(f"failed. invalid size: {size} (expected 1 to {MAX_CANDLES_SIZE})")

        params = new_query_klines_params(product, granularity, size)
        return await self._query(
            CANDLES_PATH, params, lambda doc: decode_candles(unwrap_base_response(doc))
        )

    async def query_tickers(self, product: str = "", *count: int) -> List[Ticker]:
        """
        Get tickers, sorted by the node.

        Args:
            product: Product name, or an empty string for every product
            *count: At most one value, the number of tickers (default 10)

        Returns:
            List of tickers
        """
        if len(count) > 1:
            raise InvalidParamsError(
                f"failed. invalid params input for tickers query: expected at most one count, got {len(count)}"
            )
        if product:
            check_product(product)

        if not count:
            params = new_query_ticker_params(product, DEFAULT_TICKERS_COUNT, True)
        else:
            if not isinstance(count[0], int) or count[0] < 0:
                raise InvalidParamsError(f"failed. count is not allowed to be negative: {count[0]}")
            params = new_query_ticker_params(product, count[0], True)

        return await self._query(
            TICKERS_PATH,
            params,
            lambda doc: decode_records(unwrap_base_response(doc), decode_ticker, "tickers"),
        )

    async def query_deals(
        self,
        addr: str,
        product: str,
        side: str,
        start: int,
        end: int,
        page: int,
        per_page: int,
    ) -> List[Deal]:
        """
        Get the deals of an address on a product.

        Args:
            addr: Account address
            product: Product name
            side: "BUY", "SELL", or "" for both
            start: Start of the time range, unix seconds
            end: End of the time range, unix seconds
            page: Page number, 0 together with per_page 0 for defaults
            per_page: Page size

        Returns:
            List of deals
        """
        _check_query_orders_params(addr, product, side, start, end, page, per_page)
        params = new_query_deals_params(addr, product, start, end, page, per_page, side)
        return await self._query(
            DEALS_PATH,
            params,
            lambda doc: decode_records(unwrap_list_response(doc), decode_deal, "deals"),
        )

    async def query_open_orders(
        self,
        addr: str,
        product: str,
        side: str,
        start: int,
        end: int,
        page: int,
        per_page: int,
        hide_no_fill: bool = False,
    ) -> List[Order]:
        """Get the open orders of an address. Arguments as in query_deals."""
        return await self._query_orders(
            OPEN_ORDERS_PATH, addr, product, side, start, end, page, per_page, hide_no_fill
        )

    async def query_closed_orders(
        self,
        addr: str,
        product: str,
        side: str,
        start: int,
        end: int,
        page: int,
        per_page: int,
        hide_no_fill: bool = False,
    ) -> List[Order]:
        """Get the closed orders of an address. Arguments as in query_deals."""
        return await self._query_orders(
            CLOSED_ORDERS_PATH, addr, product, side, start, end, page, per_page, hide_no_fill
        )

    async def _query_orders(
        self,
        path: str,
        addr: str,
        product: str,
        side: str,
        start: int,
        end: int,
        page: int,
        per_page: int,
        hide_no_fill: bool,
    ) -> List[Order]:
        _check_query_orders_params(addr, product, side, start, end, page, per_page)
        logger.debug(f"Querying {path} for {addr} on {product}")
        params = new_query_order_list_params(
            addr, product, side, page, per_page, start, end, hide_no_fill
        )
        return await self._query(
            path,
            params,
            lambda doc: decode_records(unwrap_list_response(doc), decode_order, "orders"),
        )

    async def query_recent_tx_record(
        self, product: str, start: int, end: int, page: int, per_page: int
    ) -> List[MatchResult]:
        """
        Get the recent match records of a product.

        Returns:
            List of match results
        """
        check_product(product)
        check_paging(start, end, page, per_page)
        params = new_query_match_params(product, start, end, page, per_page)
        return await self._query(
            RECENT_TX_RECORD_PATH,
            params,
            lambda doc: decode_records(unwrap_list_response(doc), decode_match_result, "matches"),
        )

    async def query_transactions(
        self, addr: str, tx_type: int, start: int, end: int, page: int, per_page: int
    ) -> List[Transaction]:
        """
        Get the transactions of an address.

        Args:
            addr: Account address
            tx_type: 0 for every type, 1 transfer, 2 new order, 3 cancel order
            start: Start of the time range, unix seconds
            end: End of the time range, unix seconds
            page: Page number
            per_page: Page size

        Returns:
            List of transactions
        """
        _check_address(addr)
        if not isinstance(tx_type, int) or tx_type < 0:
            raise InvalidParamsError(f"failed. invalid transaction type: {tx_type}")
        check_paging(start, end, page, per_page)

        params = new_query_tx_list_params(addr, tx_type, start, end, page, per_page)
        return await self._query(
            TRANSACTIONS_PATH,
            params,
            lambda doc: decode_records(unwrap_list_response(doc), decode_transaction, "transactions"),
        )
