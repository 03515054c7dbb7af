"""
HTTP client for the node's Tendermint JSON-RPC endpoint.

Handles request execution, optional retry on server errors, and JSON-RPC
envelope processing. HTTP and JSON-RPC failures are raised as HttpClientError
subclasses; connection failures from aiohttp propagate as raised. Neither is
decoded further.
"""

import asyncio
import itertools
import json
import logging
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientResponse, ClientSession

from .models.config import ClientConfig, RetryConfig

logger = logging.getLogger(__name__)


class HttpClient:
    """HTTP client specialized for node JSON-RPC interactions."""

    def __init__(
        self,
        config: ClientConfig,
        retry_config: Optional[RetryConfig] = None,
    ):
        """Initialize HTTP client with configuration."""
        self._config = config
        self._retry_config = retry_config or RetryConfig()
        self._request_ids = itertools.count(1)

    async def call(
        self,
        session: ClientSession,
        method: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Execute a JSON-RPC call and return its ``result`` object.

        Args:
            session: Open aiohttp session
            method: JSON-RPC method, e.g. ``abci_query``
            params: JSON-RPC params

        Returns:
            The ``result`` member of the JSON-RPC response

        Raises:
            RPCError: If the node answers with a JSON-RPC error object
            HttpClientError: On HTTP failures
            aiohttp.ClientError: On connection failures, as raised by aiohttp
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params or {},
        }
        logger.debug(f"JSON-RPC {method} -> {self._config.node_uri}")

        response_data = await self._execute_with_retry(session, payload)

        if not isinstance(response_data, dict):
            raise HttpClientError(f"Unexpected JSON-RPC response: {response_data!r}")

        error = response_data.get("error")
        if error:
            if isinstance(error, dict):
                message = error.get("message", "")
                detail = error.get("data", "")
                code = error.get("code")
            else:
                message, detail, code = str(error), "", None
            raise RPCError(
                f"JSON-RPC {method} failed: {message} {detail}".strip(),
                code=code,
                response_data=response_data,
            )

        if "result" not in response_data:
            raise HttpClientError(f"JSON-RPC response without result: {response_data!r}")
        return response_data["result"]

    async def _execute_with_retry(
        self,
        session: ClientSession,
        payload: Dict[str, Any],
    ) -> Any:
        """Execute request with retry logic."""
        last_exception = None

        for attempt in range(self._retry_config.max_retries + 1):
            try:
                async with session.post(self._config.node_uri, json=payload) as response:
                    response_data = await self._process_response(response)

                    if response.status < 400:
                        return response_data

                    # Don't retry on client errors (4xx)
                    if 400 <= response.status < 500:
                        raise HttpClientClientError(
                            f"Client error {response.status}: {response_data}",
                            status_code=response.status,
                            response_data=response_data,
                        )

                    if response.status in self._retry_config.retry_on_status:
                        raise HttpServerError(
                            f"Server error {response.status}: {response_data}",
                            status_code=response.status,
                            response_data=response_data,
                        )

                    raise HttpClientClientError(
                        f"HTTP {response.status}: {response_data}",
                        status_code=response.status,
                        response_data=response_data,
                    )

            except (HttpServerError, aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                logger.error(f"Request to {self._config.node_uri} failed (attempt {attempt + 1}): {e}")

                if attempt == self._retry_config.max_retries:
                    break

                # Calculate delay with exponential backoff
                delay = self._retry_config.retry_delay * (
                    self._retry_config.backoff_factor ** attempt
                )
                await asyncio.sleep(delay)

        raise last_exception

    async def _process_response(self, response: ClientResponse) -> Any:
        """Process HTTP response and return data."""
        response_text = await response.text()

        if not response_text:
            return {"status": response.status, "data": None}

        try:
            return json.loads(response_text)
        except json.JSONDecodeError as e:
            raise HttpClientError(
                f"Invalid JSON response (Status {response.status}): {response_text[:200]}",
                status_code=response.status,
            ) from e


class HttpClientError(Exception):
    """Base exception for transport errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Any] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class HttpServerError(HttpClientError):
    """Exception for server errors (5xx)."""
    pass


class HttpClientClientError(HttpClientError):
    """Exception for client errors (4xx)."""
    pass


class RPCError(HttpClientError):
    """The node processed the request and reported a failure code."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        codespace: Optional[str] = None,
        response_data: Optional[Any] = None,
    ):
        super().__init__(message, response_data=response_data)
        self.code = code
        self.codespace = codespace
