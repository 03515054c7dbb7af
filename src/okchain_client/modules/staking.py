"""
Staking module client.

Validators and delegators are read straight from the staking store; the
delegator query also asks the node for pending undelegations and merges both
into one response.
"""

import logging
from typing import List

from ..constants import (
    DELEGATOR_KEY,
    MSG_ADD_SHARES,
    MSG_DELEGATE,
    MSG_UNDELEGATE,
    STAKING_STORE,
    UNBOND_DELEGATION_PATH,
    VAL_ADDRESS_PREFIX,
    VALIDATORS_KEY,
)
from ..decoders import decode_delegator, decode_undelegation, decode_validator
from ..models.params import new_query_delegator_params
from ..models.staking import DelegatorResponse, Validator
from ..models.tx import Msg, TxResponse, parse_coin
from ..tx_builder import Signer
from ..utils import InvalidParamsError, acc_address_to_bytes, val_address_to_bytes, validate_address
from .base import ModuleClient

logger = logging.getLogger(__name__)


class StakingClient(ModuleClient):
    """Client for the ``staking`` module."""

    name = "staking"

    async def query_validators(self) -> List[Validator]:
        """
        Get every validator in the staking store.

        Returns:
            List of validators in store key order
        """
        pairs = await self._base_client.query_subspace(VALIDATORS_KEY, STAKING_STORE)
        logger.debug(f"Fetched {len(pairs)} validator entries")
        return self._decode_store_values(
            [pair.value for pair in pairs], STAKING_STORE, decode_validator
        )

    async def query_validator(self, val_addr: str) -> Validator:
        """
        Get one validator by its operator address.

        Args:
            val_addr: Validator operator address, ``okchainvaloper...``

        Raises:
            InvalidParamsError: If the address does not decode
            DecodeError: If no validator is stored under the address
        """
        key = VALIDATORS_KEY + val_address_to_bytes(val_addr)
        return await self._query_store(key, STAKING_STORE, decode_validator)

    async def query_delegator(self, addr: str) -> DelegatorResponse:
        """
        Get delegation info of an address, including tokens being unbonded.

        Both the store read and the unbonding query must succeed; the first
        failure is raised.

        Args:
            addr: Delegator account address

        Returns:
            DelegatorResponse merging the delegator and its undelegation
        """
        key = DELEGATOR_KEY + acc_address_to_bytes(addr)

        delegator = await self._query_store(key, STAKING_STORE, decode_delegator)
        undelegation = await self._query(
            UNBOND_DELEGATION_PATH, new_query_delegator_params(addr), decode_undelegation
        )

        return DelegatorResponse(
            delegator_address=delegator.delegator_address,
            validator_addresses=list(delegator.validator_addresses),
            shares=delegator.shares,
            tokens=delegator.tokens,
            unbonded_tokens=undelegation.quantity,
            completion_time=undelegation.completion_time,
            is_proxy=delegator.is_proxy,
            total_delegated_tokens=delegator.total_delegated_tokens,
            proxy_address=delegator.proxy_address,
        )

    async def delegate(
        self,
        signer: Signer,
        amount: str,
        memo: str,
        account_number: int,
        sequence: int,
    ) -> TxResponse:
        """Delegate ``amount`` (e.g. ``"10.24okt"``) from the signer's account."""
        quantity = parse_coin(amount)
        msg = Msg(
            type=MSG_DELEGATE,
            value={"delegator_address": signer.address, "quantity": quantity.to_dict()},
        )
        return await self._send_msgs(signer, [msg], memo, account_number, sequence)

    async def unbond(
        self,
        signer: Signer,
        amount: str,
        memo: str,
        account_number: int,
        sequence: int,
    ) -> TxResponse:
        """Start unbonding ``amount`` of delegated tokens."""
        quantity = parse_coin(amount)
        msg = Msg(
            type=MSG_UNDELEGATE,
            value={"delegator_address": signer.address, "quantity": quantity.to_dict()},
        )
        return await self._send_msgs(signer, [msg], memo, account_number, sequence)

    async def add_shares(
        self,
        signer: Signer,
        val_addrs: List[str],
        memo: str,
        account_number: int,
        sequence: int,
    ) -> TxResponse:
        """
        Vote the signer's delegated shares to a set of validators.

        Args:
            signer: Delegator signer
            val_addrs: Validator operator addresses, at least one, no duplicates
        """
        if not val_addrs:
            raise InvalidParamsError("failed. validator addresses are required")
        if len(set(val_addrs)) != len(val_addrs):
            raise InvalidParamsError(f"failed. duplicated validator addresses: {val_addrs}")
        for val_addr in val_addrs:
            if not validate_address(val_addr, VAL_ADDRESS_PREFIX):
                raise InvalidParamsError(f"failed. invalid validator address: {val_addr}")

        msg = Msg(
            type=MSG_ADD_SHARES,
            value={"delegator_address": signer.address, "validator_addresses": list(val_addrs)},
        )
        return await self._send_msgs(signer, [msg], memo, account_number, sequence)
