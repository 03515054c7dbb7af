"""
Auth module client.

Account number and sequence returned here feed the transaction builder.
"""

from ..constants import ACCOUNT_PATH
from ..decoders import decode_account
from ..models.account import Account
from ..models.params import new_query_account_params
from ..utils import InvalidParamsError, validate_address
from .base import ModuleClient


class AuthClient(ModuleClient):
    """Client for the ``auth`` module queries."""

    name = "auth"

    async def query_account(self, addr: str) -> Account:
        """Get the on-chain account of ``addr``."""
        if not validate_address(addr):
            raise InvalidParamsError(f"failed. invalid address: {addr}")
        return await self._query(ACCOUNT_PATH, new_query_account_params(addr), decode_account)
