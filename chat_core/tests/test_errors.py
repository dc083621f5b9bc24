from chat_core.domain.exceptions import ApiError, NetworkError, RateLimitError
from chat_core.session.errors import classify_error


def test_rate_limit_prefers_body():
    err = RateLimitError(code="RATE_LIMIT", message="Too Many Requests", http_status=429, body="Daily quota used")
    info = classify_error(err)
    assert info.kind == "rate_limited"
    assert info.display_text == "Daily quota used"


def test_rate_limit_falls_back_to_generic_text():
    err = RateLimitError(code="RATE_LIMIT", message="", http_status=429)
    assert classify_error(err).display_text == "Rate limit exceeded for this configuration."


def test_api_error_with_429_status_is_rate_limited():
    err = ApiError(code="API_ERROR", message="slow down", http_status=429)
    assert classify_error(err).kind == "rate_limited"


def test_server_error_uses_status_line():
    err = ApiError(code="API_ERROR", message="Service Unavailable", http_status=503, body="")
    info = classify_error(err)
    assert info.kind == "server_error"
    assert info.display_text == "Service Unavailable"


def test_server_error_generic_text_includes_status():
    err = ApiError(code="API_ERROR", message="", http_status=500)
    assert classify_error(err).display_text == "Server error (500)"


def test_network_error_has_no_status():
    info = classify_error(NetworkError(code="NETWORK_ERROR", message="All connection attempts failed"))
    assert info.kind == "network_failure"
    assert info.display_text == "All connection attempts failed"


def test_unknown_exception_is_network_failure():
    info = classify_error(ConnectionResetError())
    assert info.kind == "network_failure"
    assert info.display_text == "Chat request failed."
