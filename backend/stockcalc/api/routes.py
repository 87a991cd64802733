from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from stockcalc.errors import ErrorCode, error_message
from stockcalc.logger import get_logger
from stockcalc.pricing.targets import calculate_price_targets
from stockcalc.quotes.lookup import StockLookup, lookup_stock
from stockcalc.validation.symbols import format_symbol_input, is_client_symbol

logger = get_logger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "web" / "templates"))


def _to_json_response(lookup: StockLookup) -> JSONResponse:
    return JSONResponse(
        status_code=lookup.status_code,
        content=lookup.response.to_wire(),
        headers=lookup.headers or None,
    )


@router.get("/api/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/api/stock")
@router.get("/api/stock/")
def get_stock_without_symbol() -> JSONResponse:
    return _to_json_response(lookup_stock(None))


@router.get("/api/stock/{symbol}")
def get_stock(symbol: str) -> JSONResponse:
    logger.info(f"Http function processed request for symbol {symbol!r}")
    return _to_json_response(lookup_stock(symbol))


@router.get("/", response_class=HTMLResponse)
def index(request: Request, symbol: str | None = None) -> HTMLResponse:
    context: dict = {"symbol": "", "quote": None, "targets": None, "error": None}
    if symbol is not None:
        formatted = format_symbol_input(symbol)
        context["symbol"] = formatted
        if not is_client_symbol(formatted):
            context["error"] = error_message(ErrorCode.INVALID_SYMBOL)
        else:
            lookup = lookup_stock(formatted)
            response = lookup.response
            if response.success and response.data is not None:
                context["quote"] = response.data
                context["targets"] = calculate_price_targets(response.data.previous_close)
            else:
                code = response.error.code if response.error else None
                context["error"] = error_message(code)
    return templates.TemplateResponse(request, "index.html", context)
