# -*- coding: utf-8 -*-
"""
Tests for the wire codec and response decoders.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from okchain_client.codec import Codec, DecodeError, decode_uvarint, encode_uvarint, to_wire
from okchain_client.decoders import (
    decode_records,
    decode_ticker,
    to_decimal,
    to_int,
    unwrap_base_response,
    unwrap_list_response,
)
from okchain_client.http_client import RPCError
from okchain_client.mocks import build_tickers_bytes
from okchain_client.models.params import QueryTickerParams


@pytest.fixture
def codec() -> Codec:
    return Codec()


class TestUvarint:
    """Test the length prefix encoding."""

    @pytest.mark.parametrize("value,encoded", [(0, b"\x00"), (127, b"\x7f"), (128, b"\x80\x01"), (300, b"\xac\x02")])
    def test_known_values(self, value, encoded):
        assert encode_uvarint(value) == encoded
        assert decode_uvarint(encoded + b"rest") == (value, len(encoded))

    def test_negative(self):
        with pytest.raises(ValueError):
            encode_uvarint(-1)

    def test_truncated(self):
        with pytest.raises(DecodeError, match="truncated"):
            decode_uvarint(b"\x80\x80")

    def test_overflow(self):
        with pytest.raises(DecodeError, match="overflows"):
            decode_uvarint(b"\xff" * 11)


class TestJson:
    """Test JSON marshalling."""

    def test_marshal_uses_wire_names(self, codec):
        params = QueryTickerParams(product="btc-000_okt", count=10, sort=True)
        assert codec.marshal_json(params) == b'{"product":"btc-000_okt","count":10,"sort":true}'

    def test_decimal_fidelity(self, codec):
        doc = codec.unmarshal_json(b'{"price":1024.1024,"tiny":0.000000000000000001}')
        assert doc["price"] == Decimal("1024.1024")
        assert isinstance(doc["price"], Decimal)
        assert doc["tiny"] == Decimal("1E-18")

    @pytest.mark.parametrize("payload", [b"", b"{", b"\xff\xfe", b'{"a":1}}', b'{"a":1} ', b' {"a":1}'])
    def test_rejects_malformed(self, codec, payload):
        with pytest.raises(DecodeError):
            codec.unmarshal_json(payload)

    def test_every_truncation_rejected(self, codec):
        """Test no prefix of a valid payload decodes."""
        payload = build_tickers_bytes()
        for cut in range(len(payload)):
            with pytest.raises(DecodeError):
                codec.unmarshal_json(payload[:cut])

    def test_to_wire_scalars(self):
        moment = datetime(2019, 10, 24, 8, 0, 0, 120000, tzinfo=timezone.utc)
        assert to_wire({"a": Decimal("1.50"), "t": moment, "b": b"\x01\x02"}) == {
            "a": "1.50",
            "t": "2019-10-24T08:00:00.12Z",
            "b": "AQI=",
        }


class TestLengthPrefixed:
    """Test length-prefixed documents."""

    def test_round_trip(self, codec):
        raw = codec.marshal_binary_length_prefixed({"shares": "1024.1024"})
        assert raw[0] == len(raw) - 1
        assert codec.unmarshal_binary_length_prefixed(raw) == {"shares": "1024.1024"}

    def test_short_read(self, codec):
        raw = codec.marshal_binary_length_prefixed({"a": 1})
        with pytest.raises(DecodeError, match="short read"):
            codec.unmarshal_binary_length_prefixed(raw[:-1])

    def test_trailing_bytes(self, codec):
        raw = codec.marshal_binary_length_prefixed({"a": 1})
        with pytest.raises(DecodeError, match="trailing"):
            codec.unmarshal_binary_length_prefixed(raw + b"\x00")

    def test_empty(self, codec):
        with pytest.raises(DecodeError):
            codec.unmarshal_binary_length_prefixed(b"")


class TestDecoders:
    """Test strict field conversion."""

    @pytest.mark.parametrize(
        "value",
        [
            "abc", "NaN", "Infinity", None, True, 1.5, [], {},
            "1_000", " 1.5 ", "1.5\n", "+1.5", "1e3", ".5", "5.", "", "\u0661\u0662",
        ],
    )
    def test_to_decimal_rejects(self, value):
        with pytest.raises(DecodeError):
            to_decimal(value, "price")

    def test_to_decimal_accepts(self):
        assert to_decimal("1024.1024") == Decimal("1024.1024")
        assert to_decimal(7) == Decimal(7)
        assert to_decimal(Decimal("0.1")) == Decimal("0.1")
        assert to_decimal("-0.5") == Decimal("-0.5")

    @pytest.mark.parametrize("value,expected", [(5, 5), ("12", 12), ("-3", -3)])
    def test_to_int(self, value, expected):
        assert to_int(value) == expected

    @pytest.mark.parametrize(
        "value", ["1.5", "", None, False, Decimal("1"), "1_000", " 12", "12\n", "+12", "1e3", "\u0661\u0662"]
    )
    def test_to_int_rejects(self, value):
        with pytest.raises(DecodeError):
            to_int(value, "height")

    def test_ticker_wrong_type(self):
        with pytest.raises(DecodeError, match=r"tickers\[0\]"):
            decode_records([{"symbol": 1}], decode_ticker, "tickers")

    def test_unwrap_error_code(self):
        with pytest.raises(RPCError, match="bad product"):
            unwrap_base_response({"code": 1, "msg": "bad product", "detail_msg": "", "data": None})

    def test_unwrap_missing_data(self):
        with pytest.raises(DecodeError, match="data"):
            unwrap_base_response({"code": 0, "msg": ""})

    def test_unwrap_list_null_data(self):
        assert unwrap_list_response({"code": 0, "data": None}) == []
