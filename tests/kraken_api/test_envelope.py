"""
Tests for kraken_client/kraken_api/envelope.py

Covers the success path, exchange-reported errors, envelope protocol
violations and malformed bodies.
"""

from decimal import Decimal
from typing import Dict

import pytest

from kraken_client.exceptions import APIError, DeserializationError, ProtocolError
from kraken_client.kraken_api.envelope import decode
from kraken_client.schemas import OHLCResult, Ticker, Time


class TestDecodeSuccess:
    """Tests for decode() when the error list is empty"""

    def test_decodes_into_model(self):
        """Happy path: result is validated into the target model."""
        result = decode('{"error":[],"result":{"unixtime":1,"rfc1123":"x"}}', Time)
        assert isinstance(result, Time)
        assert result.unixtime == 1
        assert result.rfc1123 == "x"

    def test_returns_plain_json_without_type(self):
        """Happy path: no result type returns the raw JSON value."""
        assert decode('{"error":[],"result":{"ZUSD":"10.5"}}') == {"ZUSD": "10.5"}

    def test_accepts_bytes(self):
        """Edge case: bytes bodies are decoded as UTF-8 JSON."""
        result = decode(b'{"error":[],"result":{"unixtime":1,"rfc1123":"x"}}', Time)
        assert result.unixtime == 1

    def test_decodes_mapping_of_models(self):
        """Happy path: Dict[str, Model] targets are supported."""
        body = (
            '{"error":[],"result":{"XXBTZUSD":{'
            '"a":["37500.1","1","1.000"],"b":["37500.0","2","2.000"],'
            '"c":["37500.0","0.1"],"v":["10","20"],"p":["37000","37100"],'
            '"t":[100,200],"l":["36000","35000"],"h":["38000","39000"],"o":"36500.0"}}}'
        )
        result = decode(body, Dict[str, Ticker])
        ticker = result["XXBTZUSD"]
        assert ticker.a[0] == Decimal("37500.1")
        assert ticker.t == [100, 200]
        assert ticker.o == Decimal("36500.0")

    def test_decodes_ohlc_with_last_cursor(self):
        """Edge case: pair rows and the integer 'last' cursor share one mapping."""
        body = (
            '{"error":[],"result":{"XXBTZUSD":[[1616492340,"37500.0","37600.0","37400.0",'
            '"37550.0","37520.0","1.5",12]],"last":1616492340}}'
        )
        result = decode(body, OHLCResult)
        assert result["last"] == 1616492340
        row = result["XXBTZUSD"][0]
        assert row[0] == 1616492340
        assert row[4] == Decimal("37550.0")
        assert row[7] == 12

    def test_keeps_unknown_fields(self):
        """Edge case: new exchange fields do not break decoding."""
        result = decode('{"error":[],"result":{"unixtime":1,"rfc1123":"x","tz":"UTC"}}', Time)
        assert result.model_extra == {"tz": "UTC"}

    def test_falsy_result_is_still_a_result(self):
        """Edge case: empty mapping is a valid result, not a protocol violation."""
        assert decode('{"error":[],"result":{}}') == {}


class TestDecodeApiError:
    """Tests for decode() when the exchange reports errors"""

    def test_single_error(self):
        """Failure: error list becomes an APIError with that one string."""
        with pytest.raises(APIError) as exc_info:
            decode('{"error":["EGeneral:Invalid arguments"],"result":null}', Time)
        assert exc_info.value.errors == ["EGeneral:Invalid arguments"]

    def test_error_regardless_of_target_type(self):
        """Failure: the API error wins even when no result type is given."""
        with pytest.raises(APIError) as exc_info:
            decode('{"error":["EGeneral:Invalid arguments"],"result":null}')
        assert exc_info.value.errors == ["EGeneral:Invalid arguments"]

    def test_multiple_errors_preserved_in_order(self):
        """Failure: every error string is kept, in order."""
        body = '{"error":["EAPI:Invalid nonce","EGeneral:Permission denied"]}'
        with pytest.raises(APIError) as exc_info:
            decode(body)
        assert exc_info.value.errors == ["EAPI:Invalid nonce", "EGeneral:Permission denied"]
        assert str(exc_info.value) == "EAPI:Invalid nonce, EGeneral:Permission denied"

    def test_error_wins_over_present_result(self):
        """Edge case: a result next to a non-empty error list is ignored."""
        with pytest.raises(APIError):
            decode('{"error":["EOrder:Insufficient funds"],"result":{"unixtime":1,"rfc1123":"x"}}', Time)


class TestDecodeProtocolError:
    """Tests for decode() envelope invariant violations"""

    def test_null_result(self):
        """Failure: empty error list with null result is a ProtocolError."""
        with pytest.raises(ProtocolError):
            decode('{"error":[],"result":null}', Time)

    def test_missing_result_key(self):
        """Failure: empty error list without a result key is a ProtocolError."""
        with pytest.raises(ProtocolError):
            decode('{"error":[]}')


class TestDecodeDeserializationError:
    """Tests for decode() with malformed bodies"""

    def test_invalid_json(self):
        """Failure: non-JSON body raises DeserializationError with the cause."""
        with pytest.raises(DeserializationError) as exc_info:
            decode("<html>502 Bad Gateway</html>")
        assert exc_info.value.cause is not None
        assert "502 Bad Gateway" in str(exc_info.value)

    def test_not_an_object(self):
        with pytest.raises(DeserializationError):
            decode("[1, 2, 3]")

    def test_missing_error_key(self):
        with pytest.raises(DeserializationError):
            decode('{"result":{"unixtime":1}}')

    def test_error_not_a_list_of_strings(self):
        with pytest.raises(DeserializationError):
            decode('{"error":[1,2],"result":null}')

    def test_result_shape_mismatch(self):
        """Failure: result that does not fit the target type is a DeserializationError."""
        with pytest.raises(DeserializationError) as exc_info:
            decode('{"error":[],"result":{"unixtime":"soon"}}', Time)
        assert exc_info.value.cause is not None
