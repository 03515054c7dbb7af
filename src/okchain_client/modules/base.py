"""
Shared plumbing for OKChain query modules.

Every module query follows the same steps: marshal the params, dispatch them
through the base client, unmarshal the reply and decode it into records.
Transport errors pass through untouched; decode errors are logged and raised.
"""

import logging
from typing import Any, Callable, List, Optional, TypeVar

from ..base_client import BaseClient
from ..codec import DecodeError
from ..models.tx import Msg, TxResponse
from ..tx_builder import Signer, TxBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ModuleClient:
    """Base class for module clients sharing one BaseClient."""

    name = ""

    def __init__(self, base_client: BaseClient, tx_builder: Optional[TxBuilder] = None):
        self._base_client = base_client
        self._tx_builder = tx_builder

    async def _query(self, path: str, params: Any, decode: Callable[[Any], T]) -> T:
        """Marshal ``params`` as JSON, query ``path`` and decode the JSON reply."""
        codec = self._base_client.get_codec()
        raw = await self._base_client.query(path, codec.marshal_json(params))

        try:
            return decode(codec.unmarshal_json(raw))
        except DecodeError as e:
            logger.error(f"Failed to decode response of {path}: {e}")
            raise

    async def _query_store(
        self, key: bytes, store_name: str, decode: Callable[[Any], T]
    ) -> T:
        """Read one length-prefixed value from a module store and decode it."""
        codec = self._base_client.get_codec()
        raw = await self._base_client.query_store(key, store_name, "key")

        try:
            if not raw:
                raise DecodeError(f"no value stored under key {key.hex()} in {store_name}")
            return decode(codec.unmarshal_binary_length_prefixed(raw))
        except DecodeError as e:
            logger.error(f"Failed to decode {store_name} store value: {e}")
            raise

    def _decode_store_values(
        self, values: List[bytes], store_name: str, decode: Callable[[Any], T]
    ) -> List[T]:
        codec = self._base_client.get_codec()
        records = []
        for value in values:
            try:
                records.append(decode(codec.unmarshal_binary_length_prefixed(value)))
            except DecodeError as e:
                logger.error(f"Failed to decode {store_name} store value: {e}")
                raise
        return records

    async def _send_msgs(
        self,
        signer: Signer,
        msgs: List[Msg],
        memo: str,
        account_number: int,
        sequence: int,
    ) -> TxResponse:
        if self._tx_builder is None:
            raise RuntimeError(f"{type(self).__name__} was created without a TxBuilder")
        return await self._tx_builder.send(signer, msgs, memo, account_number, sequence)
