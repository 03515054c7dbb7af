"""
Dex module client.
"""

from typing import List

from ..constants import DEFAULT_PAGE, DEFAULT_PER_PAGE, PRODUCTS_PATH
from ..decoders import decode_records, decode_token_pair, unwrap_list_response
from ..models.market import TokenPair
from ..models.params import new_query_dex_info_params
from .base import ModuleClient


class DexClient(ModuleClient):
    """Client for the ``dex`` module queries."""

    name = "dex"

    async def query_products(
        self, owner: str = "", page: int = DEFAULT_PAGE, per_page: int = DEFAULT_PER_PAGE
    ) -> List[TokenPair]:
        """
        Get token pairs listed on the dex.

        Args:
            owner: Only list pairs owned by this address; empty for every pair
            page: Page number, starting at 1
            per_page: Page size

        Returns:
            List of token pairs
        """
        params = new_query_dex_info_params(owner, page, per_page)
        return await self._query(
            PRODUCTS_PATH,
            params,
            lambda doc: decode_records(unwrap_list_response(doc), decode_token_pair, "products"),
        )
