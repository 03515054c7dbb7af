# -*- coding: utf-8 -*-
"""
Tests for query parameter builders.
"""

from unittest.mock import patch

import pytest

from okchain_client.models.params import (
    new_query_acc_token_params,
    new_query_deals_params,
    new_query_delegator_params,
    new_query_depth_book_params,
    new_query_dex_info_params,
    new_query_klines_params,
    new_query_match_params,
    new_query_order_list_params,
    new_query_ticker_params,
    new_query_tx_list_params,
)
from okchain_client.utils import InvalidParamsError


class TestPagingDefaults:
    """Test (0, 0) paging becomes page 1 of 50."""

    def test_match_params(self, product):
        params = new_query_match_params(product, 0, 0, 0, 0)
        assert (params.page, params.per_page) == (1, 50)

    def test_deals_params(self, addr, product):
        params = new_query_deals_params(addr, product, 0, 0, 0, 0, "BUY")
        assert (params.page, params.per_page) == (1, 50)
        assert params.side == "BUY"

    def test_tx_list_params(self, addr):
        params = new_query_tx_list_params(addr, 1, 0, 0, 0, 0)
        assert (params.page, params.per_page) == (1, 50)

    def test_partial_paging_kept(self, product):
        """Test only the (0, 0) pair is defaulted."""
        params = new_query_match_params(product, 0, 0, 0, 20)
        assert (params.page, params.per_page) == (0, 20)


class TestOrderListParams:
    """Test order list defaults."""

    def test_zero_range_ends_now(self, addr, product):
        with patch("okchain_client.models.params.current_unix_time", return_value=1571904000):
            params = new_query_order_list_params(addr, product, "", 0, 0, 0, 0, False)

        assert params.start == 0
        assert params.end == 1571904000
        assert (params.page, params.per_page) == (1, 50)

    def test_explicit_range_kept(self, addr, product):
        params = new_query_order_list_params(addr, product, "SELL", 3, 5, 100, 200, True)

        assert (params.start, params.end) == (100, 200)
        assert (params.page, params.per_page) == (3, 5)
        assert params.hide_no_fill is True


class TestOtherParams:
    """Test builders without validation."""

    def test_depth_book_default_size(self, product):
        assert new_query_depth_book_params(product, 0).size == 200
        assert new_query_depth_book_params(product, 10).size == 10

    def test_passthrough_builders(self, addr, product):
        assert new_query_klines_params(product, 60, 100).granularity == 60
        assert new_query_ticker_params(product, 10, True).sort is True
        assert new_query_acc_token_params("okt", "partial").show == "partial"
        assert new_query_delegator_params(addr).delegator_addr == addr


class TestDexInfoParams:
    """Test the validating dex info builder."""

    def test_valid(self, addr):
        params = new_query_dex_info_params(addr, 1, 50)
        assert params.owner == addr

    def test_empty_owner(self):
        assert new_query_dex_info_params("", 1, 50).owner == ""

    def test_invalid_owner(self, addr):
        with pytest.raises(InvalidParamsError, match="invalid address"):
            new_query_dex_info_params(addr[1:], 1, 50)

    @pytest.mark.parametrize("page", [0, -1])
    def test_invalid_page(self, page):
        with pytest.raises(InvalidParamsError, match=f"failed. invalid page: {page}"):
            new_query_dex_info_params("", page, 50)

    @pytest.mark.parametrize("per_page", [0, -1])
    def test_invalid_per_page(self, per_page):
        with pytest.raises(InvalidParamsError, match=f"failed. invalid per-page: {per_page}"):
            new_query_dex_info_params("", 1, per_page)
