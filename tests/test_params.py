"""Tests for roost.routing.params — path parameter converters."""

import re

import pytest

from roost.routing.params import CONVERTERS, convert_param


class TestConvertParam:
    def test_int(self) -> None:
        assert convert_param("42", "int") == 42

    def test_int_rejects_text(self) -> None:
        with pytest.raises(ValueError):
            convert_param("abc", "int")

    def test_str(self) -> None:
        assert convert_param("john", "str") == "john"

    def test_unknown_converter(self) -> None:
        with pytest.raises(KeyError):
            convert_param("x", "uuid")


class TestUsernamePattern:
    @pytest.mark.parametrize("name", ["john", "J", "jane_doe-2", "a" * 18])
    def test_valid(self, name: str) -> None:
        pattern = CONVERTERS["username"].regex
        assert re.fullmatch(pattern, name)

    @pytest.mark.parametrize("name", ["", "2fast", "_lead", "a" * 19, "has space"])
    def test_invalid(self, name: str) -> None:
        pattern = CONVERTERS["username"].regex
        assert re.fullmatch(pattern, name) is None
