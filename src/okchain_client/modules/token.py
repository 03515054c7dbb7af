"""
Token module client.

Balance queries plus single and multi-recipient transfers.
"""

import logging
from typing import List, Tuple

from ..constants import ACCOUNT_TOKENS_PATH, MSG_MULTI_TRANSFER, MSG_TRANSFER
from ..decoders import decode_account_tokens
from ..models.account import AccountTokensInfo
from ..models.params import new_query_acc_token_params
from ..models.tx import Msg, TxResponse, parse_coins
from ..tx_builder import Signer
from ..utils import InvalidParamsError, validate_address
from .base import ModuleClient

logger = logging.getLogger(__name__)


def _check_address(addr: str) -> None:
    if not validate_address(addr):
        raise InvalidParamsError(f"failed. invalid address: {addr}")


class TokenClient(ModuleClient):
    """Client for the ``token`` module."""

    name = "token"

    async def query_account_tokens(self, addr: str) -> AccountTokensInfo:
        """Get every token balance held by ``addr``."""
        _check_address(addr)
        return await self._query(
            f"{ACCOUNT_TOKENS_PATH}/{addr}",
            new_query_acc_token_params("", "all"),
            decode_account_tokens,
        )

    async def query_account_token(self, addr: str, symbol: str) -> AccountTokensInfo:
        """Get the balance of a single token held by ``addr``."""
        _check_address(addr)
        if not symbol:
            raise InvalidParamsError("failed. token symbol is required")
        return await self._query(
            f"{ACCOUNT_TOKENS_PATH}/{addr}",
            new_query_acc_token_params(symbol, "partial"),
            decode_account_tokens,
        )

    async def send(
        self,
        signer: Signer,
        to_addr: str,
        coins: str,
        memo: str,
        account_number: int,
        sequence: int,
    ) -> TxResponse:
        """
        Transfer coins to another account.

        Args:
            signer: Sender
            to_addr: Recipient account address
            coins: Coins expression, e.g. ``"10.24okt"`` or ``"1okt,2btc-000"``
            memo: Transaction memo
            account_number: Sender's account number
            sequence: Sender's sequence

        Returns:
            TxResponse of the broadcast
        """
        _check_address(to_addr)
        amount = parse_coins(coins)
        msg = Msg(
            type=MSG_TRANSFER,
            value={
                "from_address": signer.address,
                "to_address": to_addr,
                "amount": [coin.to_dict() for coin in amount],
            },
        )
        return await self._send_msgs(signer, [msg], memo, account_number, sequence)

    async def multi_send(
        self,
        signer: Signer,
        transfers: List[Tuple[str, str]],
        memo: str,
        account_number: int,
        sequence: int,
    ) -> TxResponse:
        """
        Transfer coins to several accounts in one transaction.

        Args:
            transfers: (recipient address, coins expression) pairs
        """
        if not transfers:
            raise InvalidParamsError("failed. transfer units are required")

        units = []
        for index, transfer in enumerate(transfers):
            if not isinstance(transfer, (tuple, list)) or len(transfer) != 2:
                raise InvalidParamsError(
                    f"failed. transfer {index} must be a (recipient, coins) pair, got {transfer!r}"
                )
            to_addr, coins = transfer
            _check_address(to_addr)
            units.append(
                {
                    "to_address": to_addr,
                    "coins": [coin.to_dict() for coin in parse_coins(coins)],
                }
            )

        logger.debug(f"Multi transfer from {signer.address} to {len(units)} recipient(s)")
        msg = Msg(
            type=MSG_MULTI_TRANSFER,
            value={"from_address": signer.address, "transfers": units},
        )
        return await self._send_msgs(signer, [msg], memo, account_number, sequence)
