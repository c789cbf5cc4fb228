"""Tests for roost.errors — the exception hierarchy and error-kind derivation."""

import pytest

from roost.errors import (
    ConfigurationError,
    RequestError,
    RoostError,
    ValidationError,
    error_name,
)


class TestErrorName:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("invalid content", "InvalidContentError"),
            ("unauthenticated", "UnauthenticatedError"),
            ("post not found", "PostNotFoundError"),
            ("", "Error"),
        ],
    )
    def test_derivation(self, text: str, expected: str) -> None:
        assert error_name(text) == expected


class TestHierarchy:
    def test_all_roost_errors(self) -> None:
        assert issubclass(ConfigurationError, RoostError)
        assert issubclass(ValidationError, RoostError)
        assert issubclass(RequestError, RoostError)

    def test_request_error_str_is_message(self) -> None:
        err = RequestError(name="InvalidContentError", message="invalid content", status_code=422)
        assert str(err) == "invalid content"
        assert err.status_text == ""
        assert err.url == ""

    def test_request_error_raisable(self) -> None:
        with pytest.raises(RoostError):
            raise RequestError(name="Error", message="", status_code=0)
