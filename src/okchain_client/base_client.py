"""
Request dispatch for OKChain client.

``BaseClient`` is the narrow capability every query module depends on.
``RPCBaseClient`` implements it over the node's Tendermint JSON-RPC
``abci_query`` and ``broadcast_tx_*`` methods; ``okchain_client.mocks``
provides an in-memory double for tests.
"""

import asyncio
import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from .codec import Codec, DecodeError
from .constants import SUCCESS_CODE
from .decoders import require_field, to_int, to_list, to_str
from .http_client import HttpClient, HttpClientError, RPCError
from .models.config import BroadcastMode, ClientConfig, RetryConfig
from .models.tx import Attribute, Event, TxResponse
from .monitoring import PerformanceMonitor
from .session_manager import SessionManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KVPair:
    """Raw key/value pair returned by a store subspace scan."""
    key: bytes
    value: bytes


class BaseClient(Protocol):
    """Capabilities the query and transaction modules rely on."""

    async def query(self, path: str, data: bytes) -> bytes:
        ...

    async def query_store(self, key: bytes, store_name: str, kind: str) -> bytes:
        ...

    async def query_subspace(self, prefix: bytes, store_name: str) -> List[KVPair]:
        ...

    async def broadcast(self, tx_bytes: bytes, mode: BroadcastMode) -> TxResponse:
        ...

    def get_codec(self) -> Codec:
        ...


def _b64decode(value: Any, name: str) -> bytes:
    if value is None:
        return b""
    try:
        return base64.b64decode(to_str(value, name), validate=True)
    except binascii.Error as e:
        raise DecodeError(f"field {name!r}: invalid base64: {e}") from None


def decode_kv_pairs(document: Any) -> List[KVPair]:
    """Decode a subspace scan: an array of base64 ``{"key", "value"}`` objects."""
    return [
        KVPair(
            key=_b64decode(require_field(item, "key"), "key"),
            value=_b64decode(require_field(item, "value"), "value"),
        )
        for item in to_list(document, "kv_pairs")
    ]


def _decode_events(events: Any) -> List[Event]:
    decoded = []
    for event in to_list(events, "events"):
        attributes = [
            Attribute(
                key=_b64decode(require_field(attr, "key"), "key").decode("utf-8", errors="replace"),
                value=_b64decode(attr.get("value"), "value").decode("utf-8", errors="replace"),
            )
            for attr in to_list(require_field(event, "attributes"), "attributes")
        ]
        decoded.append(Event(type=to_str(require_field(event, "type"), "type"), attributes=attributes))
    return decoded


def decode_broadcast_result(result: Dict[str, Any], mode: BroadcastMode) -> TxResponse:
    """Build a TxResponse from a ``broadcast_tx_*`` JSON-RPC result."""
    txhash = to_str(require_field(result, "hash"), "hash")

    if mode is not BroadcastMode.BLOCK:
        return TxResponse(
            txhash=txhash,
            code=to_int(result.get("code", 0), "code"),
            data=result.get("data") or "",
            raw_log=result.get("log") or "",
            codespace=result.get("codespace"),
        )

    check_tx = require_field(result, "check_tx")
    deliver_tx = require_field(result, "deliver_tx")
    if not isinstance(check_tx, dict) or not isinstance(deliver_tx, dict):
        raise DecodeError(f"malformed broadcast_tx_commit result: {result!r}")
    outcome = check_tx if to_int(check_tx.get("code", 0), "code") != SUCCESS_CODE else deliver_tx
    return TxResponse(
        txhash=txhash,
        height=to_int(result.get("height", 0), "height"),
        code=to_int(outcome.get("code", 0), "code"),
        data=outcome.get("data") or "",
        raw_log=outcome.get("log") or "",
        gas_wanted=to_int(outcome.get("gasWanted", outcome.get("gas_wanted", 0)), "gas_wanted"),
        gas_used=to_int(outcome.get("gasUsed", outcome.get("gas_used", 0)), "gas_used"),
        codespace=outcome.get("codespace"),
        events=_decode_events(outcome.get("events")),
    )


class RPCBaseClient:
    """BaseClient backed by a node's JSON-RPC endpoint."""

    def __init__(
        self,
        config: ClientConfig,
        retry_config: Optional[RetryConfig] = None,
        codec: Optional[Codec] = None,
    ):
        self._config = config
        self._session_manager = SessionManager(config)
        self._http_client = HttpClient(config, retry_config)
        self._codec = codec or Codec()
        self._monitor = PerformanceMonitor()

    @property
    def monitor(self) -> PerformanceMonitor:
        return self._monitor

    def get_codec(self) -> Codec:
        return self._codec

    async def _call(self, method: str, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run one JSON-RPC call and record its latency."""
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        session = await self._session_manager.create_session()

        try:
            result = await self._http_client.call(session, method, params)
        except Exception as e:
            self._monitor.record_request(method, path, (loop.time() - start_time) * 1000, e)
            raise

        self._monitor.record_request(method, path, (loop.time() - start_time) * 1000)
        return result

    async def query(self, path: str, data: bytes) -> bytes:
        """
        Run an ABCI query and return the raw response value.

        Args:
            path: Query path, e.g. ``custom/backend/tickers``
            data: Serialized query parameters

        Raises:
            RPCError: If the node answers with a non-zero ABCI code
            HttpClientError: On HTTP failures or a malformed envelope
            aiohttp.ClientError: On connection failures, unchanged
        """
        logger.debug(f"abci_query {path} ({len(data)} bytes)")
        result = await self._call(
            "abci_query",
            path,
            {"path": path, "data": bytes(data).hex(), "height": "0", "prove": False},
        )

        response = result.get("response") if isinstance(result, dict) else None
        if not isinstance(response, dict):
            raise HttpClientError(f"abci_query {path}: malformed response {result!r}")

        code = response.get("code", SUCCESS_CODE)
        if code != SUCCESS_CODE:
            log = response.get("log", "")
            logger.error(f"abci_query {path} failed with code {code}: {log}")
            raise RPCError(
                f"abci_query {path} failed with code {code}: {log}",
                code=code,
                codespace=response.get("codespace"),
                response_data=response,
            )

        try:
            return _b64decode(response.get("value"), "value")
        except DecodeError as e:
            raise HttpClientError(f"abci_query {path}: {e}") from e

    async def query_store(self, key: bytes, store_name: str, kind: str) -> bytes:
        """Read a raw value from a module store."""
        return await self.query(f"/store/{store_name}/{kind}", key)

    async def query_subspace(self, prefix: bytes, store_name: str) -> List[KVPair]:
        """Scan every key/value pair under ``prefix`` in a module store."""
        raw = await self.query(f"/store/{store_name}/subspace", prefix)
        if not raw:
            return []
        return decode_kv_pairs(self._codec.unmarshal_binary_length_prefixed(raw))

    async def broadcast(self, tx_bytes: bytes, mode: BroadcastMode) -> TxResponse:
        """
        Broadcast a signed transaction.

        Args:
            tx_bytes: Encoded signed transaction
            mode: When the node should answer

        Returns:
            TxResponse describing the node's verdict
        """
        encoded = base64.b64encode(bytes(tx_bytes)).decode("ascii")
        result = await self._call(mode.rpc_method, "broadcast", {"tx": encoded})
        tx_response = decode_broadcast_result(result, mode)

        if tx_response.succeeded:
            logger.info(f"Broadcast tx {tx_response.txhash} ({mode.value})")
        else:
            logger.warning(
                f"Tx {tx_response.txhash} rejected with code {tx_response.code}: {tx_response.raw_log}"
            )
        return tx_response

    async def health_check(self) -> bool:
        await self._session_manager.create_session()
        return await self._session_manager.health_check()

    async def close(self) -> None:
        await self._session_manager.close_session()
