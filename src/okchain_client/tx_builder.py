"""
Transaction building for OKChain client.

Assembles standard transactions from messages: computes the canonical sign
bytes, asks an external signer for a signature, encodes the signed tx and
hands it to the base client for broadcast. Keys never pass through here.
"""

import logging
from typing import List, Protocol

from .base_client import BaseClient
from .models.config import ClientConfig
from .models.tx import Msg, StdFee, StdSignature, StdTx, TxResponse, parse_coins
from .utils import InvalidParamsError

logger = logging.getLogger(__name__)


class Signer(Protocol):
    """Holds a key and signs sign-bytes. Implemented outside this package."""

    @property
    def address(self) -> str:
        ...

    def sign(self, sign_bytes: bytes) -> StdSignature:
        ...


class TxBuilder:
    """Builds, signs and broadcasts standard transactions."""

    def __init__(self, base_client: BaseClient, config: ClientConfig):
        self._base_client = base_client
        self._config = config

    def build_fee(self) -> StdFee:
        """Fee configured for every transaction this client sends."""
        return StdFee(amount=parse_coins(self._config.fees), gas=self._config.gas)

    def build_sign_bytes(
        self,
        msgs: List[Msg],
        fee: StdFee,
        memo: str,
        account_number: int,
        sequence: int,
    ) -> bytes:
        """
        Canonical bytes a signer must sign.

        The document is compact, key-sorted JSON with integers written as
        strings, matching the node's verification.
        """
        if account_number < 0 or sequence < 0:
            raise InvalidParamsError(
                f"failed. invalid account number {account_number} or sequence {sequence}"
            )

        sign_doc = {
            "account_number": str(account_number),
            "chain_id": self._config.chain_id,
            "fee": fee.to_dict(),
            "memo": memo,
            "msgs": [{"type": m.type, "value": m.value} for m in msgs],
            "sequence": str(sequence),
        }
        return self._base_client.get_codec().marshal_json(sign_doc, sort_keys=True)

    def build_signed_tx(
        self,
        signer: Signer,
        msgs: List[Msg],
        memo: str,
        account_number: int,
        sequence: int,
    ) -> StdTx:
        """Sign ``msgs`` with ``signer`` and return the signed transaction."""
        if not msgs:
            raise InvalidParamsError("failed. a transaction needs at least one message")

        fee = self.build_fee()
        sign_bytes = self.build_sign_bytes(msgs, fee, memo, account_number, sequence)
        signature = signer.sign(sign_bytes)
        return StdTx(msgs=list(msgs), fee=fee, signatures=[signature], memo=memo)

    def encode_tx(self, tx: StdTx) -> bytes:
        """Encode a signed transaction for broadcast."""
        return self._base_client.get_codec().marshal_binary_length_prefixed(tx.to_dict())

    async def send(
        self,
        signer: Signer,
        msgs: List[Msg],
        memo: str,
        account_number: int,
        sequence: int,
    ) -> TxResponse:
        """Sign ``msgs`` and broadcast them using the configured mode."""
        tx = self.build_signed_tx(signer, msgs, memo, account_number, sequence)
        logger.debug(
            f"Broadcasting {len(msgs)} msg(s) from {signer.address} "
            f"(account {account_number}, sequence {sequence})"
        )
        return await self._base_client.broadcast(self.encode_tx(tx), self._config.broadcast_mode)
