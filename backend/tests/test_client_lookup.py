import email.message
import io
import json
from unittest.mock import patch
from urllib.error import HTTPError, URLError

import pytest
from loguru import logger

from stockcalc.client.lookup import (
    StockClient,
    StockLookupError,
    main,
    render_view,
)
from stockcalc.config.settings import settings
from stockcalc.errors import ErrorCode, error_message

URLOPEN = "stockcalc.client.lookup.urlopen"


@pytest.fixture
def cli_logging(capsys, monkeypatch):
    monkeypatch.setattr(settings, "log_level", "INFO")
    yield
    # main() installs a sink on the captured stderr; drop it before capture ends.
    logger.remove()


class FakeResponse:
    def __init__(self, body: bytes, status: int = 200) -> None:
        self.body = body
        self.status = status

    def read(self) -> bytes:
        return self.body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


def ok_body(previous_close: float = 100.0) -> bytes:
    return json.dumps(
        {
            "success": True,
            "data": {
                "symbol": "AAPL",
                "currentPrice": 101.5,
                "previousClose": previous_close,
                "lastUpdated": "2024-05-17",
            },
        }
    ).encode()


def http_error(code: int, body: bytes, reason: str = "Bad Gateway") -> HTTPError:
    return HTTPError("http://localhost:7071/api/stock/AAPL", code, reason, email.message.Message(), io.BytesIO(body))


def test_error_message_table() -> None:
    assert error_message(ErrorCode.RATE_LIMITED) == (
        "Too many requests. Please wait a moment before searching again."
    )
    assert error_message("MISSING_SYMBOL") == "Please enter a stock symbol"
    assert error_message("SYMBOL_NOT_FOUND") == (
        "Stock symbol not found. Please check the symbol and try again."
    )
    assert error_message("SOMETHING_ELSE") == "An unexpected error occurred. Please try again."
    assert error_message(None) == "An unexpected error occurred. Please try again."


def test_search_returns_quote_and_targets() -> None:
    with patch(URLOPEN, return_value=FakeResponse(ok_body())) as urlopen_mock:
        view = StockClient("http://localhost:7071/").search(" aapl ")

    request = urlopen_mock.call_args.args[0]
    assert request.full_url == "http://localhost:7071/api/stock/AAPL"
    assert request.get_header("Accept") == "application/json"
    assert view.quote.current_price == 101.5
    assert view.targets.gains.fifteen == 115.0
    assert view.targets.losses.five == 95.0


def test_search_validates_before_request() -> None:
    with patch(URLOPEN) as urlopen_mock, pytest.raises(StockLookupError) as excinfo:
        StockClient().search("GOOGLE")

    assert excinfo.value.code == "INVALID_SYMBOL"
    urlopen_mock.assert_not_called()


def test_fetch_maps_api_error_body() -> None:
    body = json.dumps(
        {"success": False, "error": {"code": "SYMBOL_NOT_FOUND", "message": "not found"}}
    ).encode()
    with patch(URLOPEN, side_effect=http_error(404, body, "Not Found")), pytest.raises(
        StockLookupError
    ) as excinfo:
        StockClient().fetch_stock_data("ZZZZ")

    assert excinfo.value.code == "SYMBOL_NOT_FOUND"
    assert excinfo.value.message == "not found"
    assert excinfo.value.display_message == (
        "Stock symbol not found. Please check the symbol and try again."
    )


def test_fetch_without_error_body_reports_http_status() -> None:
    with patch(URLOPEN, side_effect=http_error(502, b"<html></html>")), pytest.raises(
        StockLookupError
    ) as excinfo:
        StockClient().fetch_stock_data("AAPL")

    assert excinfo.value.code is None
    assert excinfo.value.message == "HTTP 502: Bad Gateway"
    assert excinfo.value.display_message == "An unexpected error occurred. Please try again."


def test_fetch_network_failure() -> None:
    with patch(URLOPEN, side_effect=URLError("connection refused")), pytest.raises(
        StockLookupError
    ) as excinfo:
        StockClient().fetch_stock_data("AAPL")

    assert excinfo.value.code == "NETWORK_ERROR"


@pytest.mark.parametrize(
    "body", [b"not json", b'{"success": false}', b'{"success": true}', b'{"success": true, "data": {"symbol": "X"}}']
)
def test_fetch_rejects_malformed_success(body: bytes) -> None:
    with patch(URLOPEN, return_value=FakeResponse(body)), pytest.raises(StockLookupError) as excinfo:
        StockClient().fetch_stock_data("AAPL")

    assert excinfo.value.message == "Invalid response format from API"


def test_render_view() -> None:
    with patch(URLOPEN, return_value=FakeResponse(ok_body(previous_close=148.37))):
        view = StockClient().search("AAPL")

    text = render_view(view)

    assert "Current: $101.50" in text
    assert "Previous Close: $148.37" in text
    assert "$155.79" in text
    assert "$126.11" in text


def test_main_prints_view(capsys, cli_logging) -> None:
    with patch(URLOPEN, return_value=FakeResponse(ok_body())):
        exit_code = main(["aapl", "--base-url", "http://example.test"])

    assert exit_code == 0
    assert "AAPL" in capsys.readouterr().out


def test_main_prints_error_message(capsys, cli_logging) -> None:
    with patch(URLOPEN, side_effect=URLError("down")):
        exit_code = main(["AAPL"])

    assert exit_code == 1
    assert "Network connection error" in capsys.readouterr().err


def test_main_keeps_debug_details_off_stderr(capsys, cli_logging) -> None:
    with patch(URLOPEN, side_effect=URLError("down")):
        exit_code = main(["AAPL"])

    err = capsys.readouterr().err
    assert exit_code == 1
    assert err.strip() == "Network connection error. Please check your internet connection."
    assert "Search error" not in err
