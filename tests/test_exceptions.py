"""Tests for the exception hierarchy and package re-exports."""

from ttrss_client.exceptions import (
    ApiConnectionError,
    ApiError,
    ApiResponseError,
    AuthError,
    DecodeError,
    HTTPError,
    ProtocolError,
    WalkError,
)


class TestExceptionHierarchy:
    def test_api_error_is_exception(self):
        assert issubclass(ApiError, Exception)

    def test_all_kinds_are_api_errors(self):
        for cls in (
            ApiConnectionError,
            DecodeError,
            AuthError,
            ProtocolError,
            WalkError,
            ApiResponseError,
        ):
            assert issubclass(cls, ApiError)

    def test_connection_error_does_not_shadow_builtin(self):
        assert not issubclass(ApiConnectionError, ConnectionError)

    def test_http_error_not_api_error(self):
        assert not issubclass(HTTPError, ApiError)

    def test_exit_codes(self):
        assert ApiError.exit_code == 1
        assert DecodeError.exit_code == 1
        assert AuthError.exit_code == 2


class TestInitReExports:
    def test_init_re_exports(self):
        import ttrss_client

        assert ttrss_client.ApiError is ApiError
        assert ttrss_client.AuthError is AuthError
        assert ttrss_client.ProtocolError is ProtocolError


class TestErrorAttrs:
    def test_http_error_attrs(self):
        err = HTTPError(404, "Not Found", b"body", {"X-Req": "abc"})
        assert err.code == 404
        assert err.reason == "Not Found"
        assert err.body == b"body"
        assert err.headers == {"X-Req": "abc"}

    def test_http_error_default_headers(self):
        assert HTTPError(500, "Server Error", b"").headers == {}

    def test_api_response_error_carries_envelope(self):
        sentinel = object()
        err = ApiResponseError("boom", envelope=sentinel)
        assert err.envelope is sentinel
        assert str(err) == "boom"
