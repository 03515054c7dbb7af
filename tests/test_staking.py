# -*- coding: utf-8 -*-
"""
Tests for the staking module.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from okchain_client.codec import DecodeError
from okchain_client.constants import (
    DELEGATOR_KEY,
    MSG_ADD_SHARES,
    MSG_DELEGATE,
    MSG_UNDELEGATE,
    STAKING_STORE,
    UNBOND_DELEGATION_PATH,
    VALIDATORS_KEY,
)
from okchain_client.http_client import HttpClientError
from okchain_client.mocks import (
    build_delegator_bytes,
    build_kv_pairs,
    build_undelegation_bytes,
    build_validator_bytes,
)
from okchain_client.utils import (
    InvalidParamsError,
    Timestamp,
    acc_address_to_bytes,
    format_rfc3339,
    val_address_to_bytes,
)


def _undelegation_params(addr: str) -> bytes:
    return f'{{"DelegatorAddr":"{addr}"}}'.encode("utf-8")


class TestQueryValidators:
    """Test validator listing via subspace scan."""

    @pytest.mark.asyncio
    async def test_success(self, client, mock_base_client, val_addr):
        pairs = build_kv_pairs({
            VALIDATORS_KEY + val_address_to_bytes(val_addr): build_validator_bytes(val_addr),
            VALIDATORS_KEY + bytes(20): build_validator_bytes(val_addr, moniker="second"),
        })
        mock_base_client.expect_query_subspace(VALIDATORS_KEY, STAKING_STORE, pairs)

        validators = await client.staking.query_validators()

        assert [v.description.moniker for v in validators] == ["okchain", "second"]
        assert validators[0].operator_address == val_addr
        assert validators[0].delegator_shares == Decimal("1024.1024")
        assert validators[0].status == 2
        assert validators[0].jailed is False

    @pytest.mark.asyncio
    async def test_empty(self, client, mock_base_client):
        mock_base_client.expect_query_subspace(VALIDATORS_KEY, STAKING_STORE, [])
        assert await client.staking.query_validators() == []

    @pytest.mark.asyncio
    async def test_corrupt_value(self, client, mock_base_client, val_addr):
        pairs = build_kv_pairs({VALIDATORS_KEY: build_validator_bytes(val_addr)[:-1]})
        mock_base_client.expect_query_subspace(VALIDATORS_KEY, STAKING_STORE, pairs)

        with pytest.raises(DecodeError, match="short read"):
            await client.staking.query_validators()


class TestQueryValidator:
    """Test single validator lookup."""

    @pytest.mark.asyncio
    async def test_success(self, client, mock_base_client, val_addr):
        key = VALIDATORS_KEY + val_address_to_bytes(val_addr)
        mock_base_client.expect_query_store(key, STAKING_STORE, "key", build_validator_bytes(val_addr))

        validator = await client.staking.query_validator(val_addr)

        assert validator.operator_address == val_addr
        assert validator.min_self_delegation == Decimal("0.001")
        assert validator.unbonding_completion_time == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_not_found(self, client, mock_base_client, val_addr):
        key = VALIDATORS_KEY + val_address_to_bytes(val_addr)
        mock_base_client.expect_query_store(key, STAKING_STORE, "key", b"")

        with pytest.raises(DecodeError, match="no value stored"):
            await client.staking.query_validator(val_addr)

    @pytest.mark.asyncio
    async def test_trailing_byte(self, client, mock_base_client, val_addr):
        key = VALIDATORS_KEY + val_address_to_bytes(val_addr)
        mock_base_client.expect_query_store(
            key, STAKING_STORE, "key", build_validator_bytes(val_addr) + b"\x00"
        )

        with pytest.raises(DecodeError, match="trailing"):
            await client.staking.query_validator(val_addr)

    @pytest.mark.asyncio
    async def test_account_address_rejected(self, client, mock_base_client, addr):
        with pytest.raises(InvalidParamsError, match="invalid validator address"):
            await client.staking.query_validator(addr)
        assert mock_base_client.calls == []


class TestQueryDelegator:
    """Test the composite delegator query."""

    @pytest.mark.asyncio
    async def test_merges_delegator_and_undelegation(
        self, client, mock_base_client, staking_addr, val_addr
    ):
        key = DELEGATOR_KEY + acc_address_to_bytes(staking_addr)
        mock_base_client.expect_query_store(
            key, STAKING_STORE, "key", build_delegator_bytes(staking_addr, [val_addr])
        )
        mock_base_client.expect_query(
            UNBOND_DELEGATION_PATH,
            _undelegation_params(staking_addr),
            build_undelegation_bytes(staking_addr, quantity="10.24"),
        )

        response = await client.staking.query_delegator(staking_addr)

        assert response.delegator_address == staking_addr
        assert response.validator_addresses == [val_addr]
        assert response.shares == Decimal("1024.1024")
        assert response.tokens == Decimal("1024.1024")
        assert response.unbonded_tokens == Decimal("10.24")
        assert response.completion_time == Timestamp(
            2019, 10, 24, 8, 0, 0, 123456, tzinfo=timezone.utc, nanosecond=789
        )
        assert format_rfc3339(response.completion_time) == "2019-10-24T08:00:00.123456789Z"
        assert response.is_proxy is False
        mock_base_client.assert_all_consumed()

    @pytest.mark.asyncio
    async def test_store_failure_stops_early(self, client, mock_base_client, staking_addr):
        """Test a failing store read fails the call without the second query."""
        key = DELEGATOR_KEY + acc_address_to_bytes(staking_addr)
        mock_base_client.expect_query_store(key, STAKING_STORE, "key", HttpClientError("timeout"))

        with pytest.raises(HttpClientError, match="timeout"):
            await client.staking.query_delegator(staking_addr)
        assert all(call[0] == "query_store" for call in mock_base_client.calls)

    @pytest.mark.asyncio
    async def test_undelegation_failure(self, client, mock_base_client, staking_addr, val_addr):
        key = DELEGATOR_KEY + acc_address_to_bytes(staking_addr)
        mock_base_client.expect_query_store(
            key, STAKING_STORE, "key", build_delegator_bytes(staking_addr, [val_addr])
        )
        mock_base_client.expect_query(
            UNBOND_DELEGATION_PATH,
            _undelegation_params(staking_addr),
            build_undelegation_bytes(staking_addr) + b"}",
        )

        with pytest.raises(DecodeError):
            await client.staking.query_delegator(staking_addr)

    @pytest.mark.asyncio
    async def test_invalid_address(self, client, mock_base_client, addr):
        with pytest.raises(InvalidParamsError):
            await client.staking.query_delegator(addr[1:])
        assert mock_base_client.calls == []


class TestStakingMessages:
    """Test delegate, unbond and add_shares transactions."""

    @pytest.mark.asyncio
    async def test_delegate(self, client, mock_base_client, signer):
        response = await client.staking.delegate(signer, "10.24okt", "", 3, 7)

        assert response.txhash == "MOCKHASH"
        sign_doc = json.loads(signer.signed[0])
        assert sign_doc["msgs"] == [{
            "type": MSG_DELEGATE,
            "value": {
                "delegator_address": signer.address,
                "quantity": {"denom": "okt", "amount": "10.24"},
            },
        }]
        assert sign_doc["account_number"] == "3"
        assert sign_doc["sequence"] == "7"

    @pytest.mark.asyncio
    async def test_unbond(self, client, mock_base_client, signer):
        await client.staking.unbond(signer, "1okt", "memo", 0, 0)

        sign_doc = json.loads(signer.signed[0])
        assert sign_doc["msgs"][0]["type"] == MSG_UNDELEGATE
        assert sign_doc["memo"] == "memo"

    @pytest.mark.asyncio
    async def test_delegate_invalid_amount(self, client, mock_base_client, signer):
        with pytest.raises(InvalidParamsError):
            await client.staking.delegate(signer, "-1okt", "", 0, 0)
        assert mock_base_client.broadcasts == []

    @pytest.mark.asyncio
    async def test_add_shares(self, client, mock_base_client, signer, val_addr):
        await client.staking.add_shares(signer, [val_addr], "", 0, 1)

        sign_doc = json.loads(signer.signed[0])
        assert sign_doc["msgs"][0] == {
            "type": MSG_ADD_SHARES,
            "value": {"delegator_address": signer.address, "validator_addresses": [val_addr]},
        }
        assert len(mock_base_client.broadcasts) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("val_addrs", [[], ["okchainvaloper1invalid"]])
    async def test_add_shares_invalid(self, client, mock_base_client, signer, val_addrs):
        with pytest.raises(InvalidParamsError):
            await client.staking.add_shares(signer, val_addrs, "", 0, 1)

    @pytest.mark.asyncio
    async def test_add_shares_duplicates(self, client, signer, val_addr):
        with pytest.raises(InvalidParamsError, match="duplicated"):
            await client.staking.add_shares(signer, [val_addr, val_addr], "", 0, 1)
