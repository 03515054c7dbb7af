"""
Session management for OKChain client.

Owns the single aiohttp session shared by every JSON-RPC call and checks the
node's Tendermint ``/health`` route.
"""

import asyncio
import json
import logging
from typing import Optional

import aiohttp

from .models.config import ClientConfig

logger = logging.getLogger(__name__)

HEALTH_TIMEOUT = 5.0


class SessionManager:
    """Lazily opens, reuses and closes the node session."""

    def __init__(self, config: ClientConfig):
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def health_url(self) -> str:
        return f"{self._config.node_uri.rstrip('/')}/health"

    async def create_session(self) -> aiohttp.ClientSession:
        """Return the open session, creating it on first use."""
        if self._session is not None and not self._session.closed:
            return self._session

        logger.debug(f"Opening session to {self._config.node_uri}")
        self._session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(limit=100, limit_per_host=20, ttl_dns_cache=300),
            timeout=aiohttp.ClientTimeout(total=self._config.timeout),
            headers={
                "User-Agent": "okchain-client/0.1",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )
        return self._session

    async def close_session(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def health_check(self) -> bool:
        """
        Ask the node's ``/health`` route whether it is up.

        Tendermint answers ``{"jsonrpc": "2.0", "id": -1, "result": {}}`` when
        healthy. Any other status or body, or a connection failure, counts as
        unhealthy.
        """
        session = await self.create_session()

        try:
            async with session.get(
                self.health_url, timeout=aiohttp.ClientTimeout(total=HEALTH_TIMEOUT)
            ) as response:
                if response.status != 200:
                    logger.warning(f"Health check of {self.health_url} returned HTTP {response.status}")
                    return False
                body = json.loads(await response.text())
        except (aiohttp.ClientError, asyncio.TimeoutError, ConnectionError) as e:
            logger.warning(f"Health check of {self.health_url} failed: {e!r}")
            return False
        except ValueError:
            logger.warning(f"Health check of {self.health_url} returned a non-JSON body")
            return False

        return isinstance(body, dict) and "result" in body and not body.get("error")
