"""
Order module client.

Depth book queries and the messages that place and cancel dex orders.
"""

import logging
from decimal import Decimal
from typing import List, Union

from ..constants import DEPTH_BOOK_PATH, MSG_CANCEL_ORDER, MSG_NEW_ORDER, SIDE_BUY, SIDE_SELL
from ..decoders import decode_book_res
from ..models.market import BookRes
from ..models.params import new_query_depth_book_params
from ..models.tx import Msg, TxResponse
from ..tx_builder import Signer
from ..utils import InvalidParamsError, check_product, validate_price, validate_quantity
from .base import ModuleClient

logger = logging.getLogger(__name__)


class OrderClient(ModuleClient):
    """Client for the ``order`` module."""

    name = "order"

    async def query_depth_book(self, product: str, size: int = 0) -> BookRes:
        """
        Get the depth book of a product.

        Args:
            product: Product name
            size: Levels per side, 0 for the default of 200

        Returns:
            BookRes with asks and bids
        """
        check_product(product)
        if not isinstance(size, int) or size < 0:
            raise InvalidParamsError(f"failed. invalid size: {size}")
        return await self._query(
            DEPTH_BOOK_PATH, new_query_depth_book_params(product, size), decode_book_res
        )

    async def new_order(
        self,
        signer: Signer,
        product: str,
        side: str,
        price: Union[Decimal, str],
        quantity: Union[Decimal, str],
        memo: str,
        account_number: int,
        sequence: int,
    ) -> TxResponse:
        """
        Place a limit order.

        Args:
            signer: Order owner
            product: Product name, e.g. ``btc-000_okt``
            side: "BUY" or "SELL"
            price: Limit price
            quantity: Order quantity

        Returns:
            TxResponse of the broadcast; see get_order_ids_from_response
        """
        check_product(product)
        if side not in (SIDE_BUY, SIDE_SELL):
            raise InvalidParamsError(f"failed. invalid side: {side!r}")
        if not validate_price(price):
            raise InvalidParamsError(f"failed. invalid price: {price}")
        if not validate_quantity(quantity):
            raise InvalidParamsError(f"failed. invalid quantity: {quantity}")

        msg = Msg(
            type=MSG_NEW_ORDER,
            value={
                "sender": signer.address,
                "order_items": [
                    {
                        "product": product,
                        "side": side,
                        "price": str(Decimal(str(price))),
                        "quantity": str(Decimal(str(quantity))),
                    }
                ],
            },
        )
        logger.debug(f"New {side} order on {product}: {quantity} @ {price}")
        return await self._send_msgs(signer, [msg], memo, account_number, sequence)

    async def cancel_order(
        self,
        signer: Signer,
        order_ids: List[str],
        memo: str,
        account_number: int,
        sequence: int,
    ) -> TxResponse:
        """Cancel one or more orders by ID."""
        if not order_ids or any(not order_id for order_id in order_ids):
            raise InvalidParamsError(f"failed. invalid order ids: {order_ids}")

        msg = Msg(
            type=MSG_CANCEL_ORDER,
            value={"sender": signer.address, "order_ids": list(order_ids)},
        )
        return await self._send_msgs(signer, [msg], memo, account_number, sequence)
