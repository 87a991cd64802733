"""HTTP client for the stock endpoint, plus the ``stockcalc-lookup`` CLI.

Usage:
    stockcalc-lookup AAPL
    stockcalc-lookup msft --base-url https://your-app.example.net
"""
from __future__ import annotations

import argparse
import json
import socket
import sys
from dataclasses import dataclass
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from pydantic import ValidationError

from stockcalc.config.settings import settings
from stockcalc.errors import ERROR_MESSAGES, UNEXPECTED_ERROR_MESSAGE, ErrorCode, error_message
from stockcalc.logger import configure_logging, get_logger
from stockcalc.pricing.targets import calculate_price_targets
from stockcalc.schemas.stock import PriceTargets, Quote
from stockcalc.validation.symbols import format_symbol_input, is_client_symbol

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:7071"


class StockLookupError(Exception):
    def __init__(self, code: str | None, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)

    @property
    def display_message(self) -> str:
        if self.code:
            return error_message(self.code)
        return UNEXPECTED_ERROR_MESSAGE


@dataclass
class LookupView:
    quote: Quote
    targets: PriceTargets


class StockClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")

    def fetch_stock_data(self, symbol: str) -> Quote:
        url = f"{self.base_url}/api/stock/{symbol.upper()}"
        request = Request(url, headers={"Accept": "application/json"}, method="GET")
        try:
            with urlopen(request) as response:
                body = response.read()
        except HTTPError as exc:
            raise self._error_from_response(exc) from exc
        except (URLError, TimeoutError, socket.timeout, ConnectionError) as exc:
            raise StockLookupError(
                ErrorCode.NETWORK_ERROR.value, ERROR_MESSAGES[ErrorCode.NETWORK_ERROR]
            ) from exc

        try:
            result = json.loads(body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StockLookupError(None, "Invalid response format from API") from exc

        if not isinstance(result, dict) or not result.get("success") or not result.get("data"):
            raise StockLookupError(None, "Invalid response format from API")
        try:
            return Quote.model_validate(result["data"])
        except ValidationError as exc:
            raise StockLookupError(None, "Invalid response format from API") from exc

    @staticmethod
    def _error_from_response(exc: HTTPError) -> StockLookupError:
        fallback = StockLookupError(None, f"HTTP {exc.code}: {exc.reason}")
        try:
            result = json.loads(exc.read().decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError):
            return fallback
        error = result.get("error") if isinstance(result, dict) else None
        if not isinstance(error, dict):
            return fallback
        return StockLookupError(error.get("code"), error.get("message") or fallback.message)

    def search(self, raw_symbol: str | None) -> LookupView:
        symbol = format_symbol_input(raw_symbol)
        if not is_client_symbol(symbol):
            raise StockLookupError(
                ErrorCode.INVALID_SYMBOL.value, ERROR_MESSAGES[ErrorCode.INVALID_SYMBOL]
            )
        quote = self.fetch_stock_data(symbol)
        return LookupView(quote=quote, targets=calculate_price_targets(quote.previous_close))


def render_view(view: LookupView) -> str:
    quote, targets = view.quote, view.targets
    lines = [
        quote.symbol,
        f"Current: ${quote.current_price:.2f}",
        f"Previous Close: ${quote.previous_close:.2f}",
    ]
    if quote.last_updated:
        lines.append(f"Last Updated: {quote.last_updated}")
    lines.append("")
    lines.append("Gain targets")
    for label, value in (("+5%", targets.gains.five), ("+10%", targets.gains.ten), ("+15%", targets.gains.fifteen)):
        lines.append(f"  {label:>5}  ${value:.2f}")
    lines.append("Loss targets")
    for label, value in (("-5%", targets.losses.five), ("-10%", targets.losses.ten), ("-15%", targets.losses.fifteen)):
        lines.append(f"  {label:>5}  ${value:.2f}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Look up a stock and its price targets.")
    parser.add_argument("symbol", help="Ticker symbol, 1-5 letters")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Deployment base URL")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    client = StockClient(args.base_url)
    try:
        view = client.search(args.symbol)
    except StockLookupError as exc:
        logger.debug(f"Search error: code={exc.code} message={exc.message}")
        print(exc.display_message, file=sys.stderr)
        return 1
    print(render_view(view))
    return 0


if __name__ == "__main__":
    sys.exit(main())
