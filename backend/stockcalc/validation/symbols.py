from __future__ import annotations

import re

SYMBOL_RE = re.compile(r"^[A-Za-z]{1,5}$")
_CLIENT_SYMBOL_RE = re.compile(r"^[A-Z]{1,5}$")


def is_valid_symbol(symbol: str) -> bool:
    """Authoritative server-side check, applied before any upstream call."""
    return bool(SYMBOL_RE.fullmatch(symbol))


def normalize_symbol(symbol: str) -> str:
    return symbol.upper()


def format_symbol_input(raw: str | None) -> str:
    return (raw or "").strip().upper()


def is_client_symbol(symbol: str | None) -> bool:
    # Client-side short-circuit only; expects already formatted input.
    if not symbol:
        return False
    return bool(_CLIENT_SYMBOL_RE.fullmatch(symbol))
