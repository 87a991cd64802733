from __future__ import annotations

from dataclasses import dataclass, field

from stockcalc.config.settings import settings
from stockcalc.errors import ERROR_MESSAGES, ErrorCode, QuoteLookupError
from stockcalc.logger import get_logger
from stockcalc.pricing.targets import round_price
from stockcalc.providers import alphavantage
from stockcalc.schemas.provider import QuoteSnapshot
from stockcalc.schemas.stock import ErrorDetail, Quote, StockResponse
from stockcalc.validation.symbols import is_valid_symbol, normalize_symbol

logger = get_logger(__name__)

_QUOTE_KEY = "Global Quote"
_SYMBOL_FIELD = "01. symbol"
_PRICE_FIELD = "05. price"
_LATEST_DAY_FIELD = "07. latest trading day"
_PREVIOUS_CLOSE_FIELD = "08. previous close"


@dataclass
class StockLookup:
    status_code: int
    response: StockResponse
    headers: dict[str, str] = field(default_factory=dict)


def _error_lookup(code: ErrorCode, status_code: int) -> StockLookup:
    return StockLookup(
        status_code=status_code,
        response=StockResponse(
            success=False,
            error=ErrorDetail(code=code, message=ERROR_MESSAGES[code]),
        ),
    )


def _extract_quote(snapshot: QuoteSnapshot) -> Quote:
    if snapshot.status == "network_error":
        raise QuoteLookupError(ErrorCode.NETWORK_ERROR, 502)
    if snapshot.status == "http_error":
        raise QuoteLookupError(ErrorCode.API_UNAVAILABLE, 502)
    if snapshot.status != "ok":
        raise QuoteLookupError(ErrorCode.API_UNAVAILABLE, 500)

    quote = snapshot.payload.get(_QUOTE_KEY)
    # An unexpected upstream shape is reported as an unknown ticker.
    if not isinstance(quote, dict) or not quote.get(_SYMBOL_FIELD):
        logger.warning(f"No data found for symbol: {snapshot.symbol}")
        raise QuoteLookupError(ErrorCode.SYMBOL_NOT_FOUND, 404)

    return Quote(
        symbol=quote[_SYMBOL_FIELD],
        current_price=round_price(quote[_PRICE_FIELD]),
        previous_close=round_price(quote[_PREVIOUS_CLOSE_FIELD]),
        last_updated=quote.get(_LATEST_DAY_FIELD),
    )


def lookup_stock(symbol: str | None) -> StockLookup:
    """Resolve ``symbol`` into a quote or an error response with its HTTP status.

    Every failure is converted here; nothing raises past this function.
    """
    if not symbol:
        return _error_lookup(ErrorCode.MISSING_SYMBOL, 400)
    if not is_valid_symbol(symbol):
        return _error_lookup(ErrorCode.INVALID_SYMBOL, 400)

    api_key = settings.alpha_vantage.api_key
    if not api_key:
        logger.error("Alpha Vantage API key not configured")
        return _error_lookup(ErrorCode.API_UNAVAILABLE, 500)

    normalized = normalize_symbol(symbol)
    try:
        logger.info(f"Fetching stock data for symbol: {normalized}")
        snapshot = alphavantage.fetch_global_quote(normalized, api_key)
        quote = _extract_quote(snapshot)
    except QuoteLookupError as exc:
        return _error_lookup(exc.code, exc.status_code)
    except Exception as exc:
        logger.exception(f"Error fetching stock data for {normalized}: {exc}")
        return _error_lookup(ErrorCode.API_UNAVAILABLE, 500)

    logger.info(
        f"Successfully fetched data for {normalized}: "
        f"Current: ${quote.current_price}, Previous: ${quote.previous_close}"
    )
    return StockLookup(
        status_code=200,
        response=StockResponse(success=True, data=quote),
        headers={"Cache-Control": f"public, max-age={settings.cache_max_age_seconds}"},
    )
