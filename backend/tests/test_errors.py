import pytest

from stockcalc.errors import ERROR_MESSAGES, ErrorCode, QuoteLookupError, error_message


def test_quote_lookup_error_uses_fixed_message() -> None:
    exc = QuoteLookupError(ErrorCode.SYMBOL_NOT_FOUND, 404)

    assert exc.status_code == 404
    assert exc.message == ERROR_MESSAGES[ErrorCode.SYMBOL_NOT_FOUND]
    assert str(exc).startswith("SYMBOL_NOT_FOUND: ")


def test_quote_lookup_error_rejects_custom_message() -> None:
    with pytest.raises(TypeError):
        QuoteLookupError(ErrorCode.API_UNAVAILABLE, 500, "custom")


def test_display_messages_cover_every_code() -> None:
    for code in ErrorCode:
        assert error_message(code) != "An unexpected error occurred. Please try again."


def test_routes_do_not_depend_on_the_cli_client() -> None:
    import stockcalc.api.routes as routes

    assert routes.error_message is error_message
