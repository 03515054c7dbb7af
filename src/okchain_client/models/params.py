"""
Query parameter models for OKChain client.

Each record mirrors the parameter structure the node expects for one query
path. The ``new_*`` builders fill in defaults: pagination of (0, 0) becomes
the default page and page size, and an order-list time range of (0, 0) ends
now. Only ``new_query_dex_info_params`` validates its input.
"""

from dataclasses import dataclass, field

from ..constants import DEFAULT_BOOK_SIZE, DEFAULT_PAGE, DEFAULT_PER_PAGE
from ..utils import InvalidParamsError, current_unix_time, validate_address


def _wire(name: str):
    """Dataclass field serialized under ``name``."""
    return field(metadata={"json": name})


def _default_paging(page: int, per_page: int) -> tuple[int, int]:
    if page == 0 and per_page == 0:
        return DEFAULT_PAGE, DEFAULT_PER_PAGE
    return page, per_page


@dataclass(frozen=True)
class QueryAccTokenParams:
    """Params to query a specific token in an account."""
    symbol: str = _wire("Symbol")
    show: str = _wire("Show")


def new_query_acc_token_params(symbol: str, show: str) -> QueryAccTokenParams:
    return QueryAccTokenParams(symbol=symbol, show=show)


@dataclass(frozen=True)
class QueryDepthBookParams:
    """Params to query the depth book of a product."""
    product: str = _wire("Product")
    size: int = _wire("Size")


def new_query_depth_book_params(product: str, size: int) -> QueryDepthBookParams:
    if size == 0:
        size = DEFAULT_BOOK_SIZE
    return QueryDepthBookParams(product=product, size=size)


@dataclass(frozen=True)
class QueryKlinesParams:
    """Params to query the klines of a product."""
    product: str = _wire("Product")
    granularity: int = _wire("Granularity")
    size: int = _wire("Size")


def new_query_klines_params(product: str, granularity: int, size: int) -> QueryKlinesParams:
    return QueryKlinesParams(product=product, granularity=granularity, size=size)


@dataclass(frozen=True)
class QueryTickerParams:
    """Params to query tickers."""
    product: str = _wire("product")
    count: int = _wire("count")
    sort: bool = _wire("sort")


def new_query_ticker_params(product: str, count: int, sort: bool) -> QueryTickerParams:
    return QueryTickerParams(product=product, count=count, sort=sort)


@dataclass(frozen=True)
class QueryMatchParams:
    """Params to query the match (recent trade) records of a product."""
    product: str = _wire("Product")
    start: int = _wire("Start")
    end: int = _wire("End")
    page: int = _wire("Page")
    per_page: int = _wire("PerPage")


def new_query_match_params(
    product: str, start: int, end: int, page: int, per_page: int
) -> QueryMatchParams:
    page, per_page = _default_paging(page, per_page)
    return QueryMatchParams(product=product, start=start, end=end, page=page, per_page=per_page)


@dataclass(frozen=True)
class QueryOrderListParams:
    """Params to query an address's open or closed orders."""
    address: str = _wire("Address")
    product: str = _wire("Product")
    page: int = _wire("Page")
    per_page: int = _wire("PerPage")
    start: int = _wire("Start")
    end: int = _wire("End")
    side: str = _wire("Side")
    hide_no_fill: bool = _wire("HideNoFill")


def new_query_order_list_params(
    addr: str,
    product: str,
    side: str,
    page: int,
    per_page: int,
    start: int,
    end: int,
    hide_no_fill: bool,
) -> QueryOrderListParams:
    page, per_page = _default_paging(page, per_page)
    if start == 0 and end == 0:
        end = current_unix_time()
    return QueryOrderListParams(
        address=addr,
        product=product,
        page=page,
        per_page=per_page,
        start=start,
        end=end,
        side=side,
        hide_no_fill=hide_no_fill,
    )


@dataclass(frozen=True)
class QueryDealsParams:
    """Params to query an address's deals on a product."""
    address: str = _wire("Address")
    product: str = _wire("Product")
    start: int = _wire("Start")
    end: int = _wire("End")
    page: int = _wire("Page")
    per_page: int = _wire("PerPage")
    side: str = _wire("Side")


def new_query_deals_params(
    addr: str, product: str, start: int, end: int, page: int, per_page: int, side: str
) -> QueryDealsParams:
    page, per_page = _default_paging(page, per_page)
    return QueryDealsParams(
        address=addr,
        product=product,
        start=start,
        end=end,
        page=page,
        per_page=per_page,
        side=side,
    )


@dataclass(frozen=True)
class QueryTxListParams:
    """Params to query an address's transactions."""
    address: str = _wire("Address")
    tx_type: int = _wire("TxType")
    start_time: int = _wire("StartTime")
    end_time: int = _wire("EndTime")
    page: int = _wire("Page")
    per_page: int = _wire("PerPage")


def new_query_tx_list_params(
    addr: str, tx_type: int, start_time: int, end_time: int, page: int, per_page: int
) -> QueryTxListParams:
    page, per_page = _default_paging(page, per_page)
    return QueryTxListParams(
        address=addr,
        tx_type=tx_type,
        start_time=start_time,
        end_time=end_time,
        page=page,
        per_page=per_page,
    )


@dataclass(frozen=True)
class QueryDelegatorParams:
    """Params to query delegator info."""
    delegator_addr: str = _wire("DelegatorAddr")


def new_query_delegator_params(delegator_addr: str) -> QueryDelegatorParams:
    return QueryDelegatorParams(delegator_addr=delegator_addr)


@dataclass(frozen=True)
class QueryDexInfoParams:
    """Params to query token pairs listed on the dex."""
    owner: str = _wire("Owner")
    page: int = _wire("Page")
    per_page: int = _wire("PerPage")


def new_query_dex_info_params(owner: str, page: int, per_page: int) -> QueryDexInfoParams:
    """
    Build dex info params, validating every field.

    Raises:
        InvalidParamsError: If owner is not a valid account address, or page
            or per_page is not positive
    """
    if not owner:
        owner = ""
    elif not validate_address(owner):
        raise InvalidParamsError(f"failed. invalid address: {owner}")

    if page <= 0:
        raise InvalidParamsError(f"failed. invalid page: {page}")
    if per_page <= 0:
        raise InvalidParamsError(f"failed. invalid per-page: {per_page}")

    return QueryDexInfoParams(owner=owner, page=page, per_page=per_page)


@dataclass(frozen=True)
class QueryAccountParams:
    """Params to query an account by address."""
    address: str = _wire("Address")


def new_query_account_params(addr: str) -> QueryAccountParams:
    return QueryAccountParams(address=addr)
