from __future__ import annotations

import json
import socket
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from stockcalc.config.settings import settings
from stockcalc.logger import get_logger
from stockcalc.schemas.provider import QuoteSnapshot

logger = get_logger(__name__)

_QUERY_PATH = "/query"
PROVIDER = "alphavantage"


def _build_url(params: dict[str, str]) -> str:
    base_url = settings.alpha_vantage.base_url.rstrip("/")
    return f"{base_url}{_QUERY_PATH}?{urlencode(params)}"


def _open(request: Request):
    timeout = settings.upstream_timeout_seconds
    if timeout is None:
        return urlopen(request)
    return urlopen(request, timeout=timeout)


def fetch_global_quote(symbol: str, api_key: str) -> QuoteSnapshot:
    """Issue the single GLOBAL_QUOTE request for ``symbol``.

    Upstream outcomes are reported through ``QuoteSnapshot.status``:
    ``ok``, ``http_error``, ``network_error`` or ``invalid_payload``.
    """
    url = _build_url({"function": "GLOBAL_QUOTE", "symbol": symbol, "apikey": api_key})
    request = Request(url, headers={"User-Agent": settings.user_agent}, method="GET")
    try:
        with _open(request) as response:
            http_status = response.status
            body = response.read()
    except HTTPError as exc:
        logger.error(f"Alpha Vantage API returned status: {exc.code}")
        return QuoteSnapshot(
            provider=PROVIDER, symbol=symbol, status="http_error", http_status=exc.code
        )
    except (URLError, TimeoutError, socket.timeout, ConnectionError) as exc:
        logger.error(f"Network failure reaching Alpha Vantage for {symbol}: {exc}")
        return QuoteSnapshot(provider=PROVIDER, symbol=symbol, status="network_error")

    try:
        payload = json.loads(body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.error(f"Alpha Vantage returned a non-JSON body for {symbol}")
        return QuoteSnapshot(
            provider=PROVIDER,
            symbol=symbol,
            status="invalid_payload",
            http_status=http_status,
        )

    if not isinstance(payload, dict):
        # Callers treat an empty payload the same as a missing quote.
        payload = {}

    return QuoteSnapshot(
        provider=PROVIDER,
        symbol=symbol,
        payload=payload,
        status="ok",
        http_status=http_status,
    )
