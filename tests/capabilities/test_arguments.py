"""Tests for typed argument extraction."""

from __future__ import annotations

import pytest

from switchboard.capabilities.arguments import Arguments
from switchboard.protocol.errors import InvalidParamsError


class TestFromParams:
    def test_none_is_empty(self) -> None:
        args = Arguments.from_params(None)
        assert len(args) == 0
        assert args.as_dict() == {}

    def test_dict(self) -> None:
        args = Arguments.from_params({"text": "hi"})
        assert "text" in args
        assert args.as_dict() == {"text": "hi"}

    @pytest.mark.parametrize("raw", [[1, 2], "text", 5])
    def test_non_object_rejected(self, raw: object) -> None:
        with pytest.raises(InvalidParamsError, match="must be an object"):
            Arguments.from_params(raw)

    def test_copy_is_isolated(self) -> None:
        raw = {"text": "hi"}
        args = Arguments.from_params(raw)
        raw["text"] = "changed"
        assert args.get_str("text", "") == "hi"


class TestGetStr:
    def test_present(self) -> None:
        assert Arguments({"text": "hello"}).get_str("text", "x") == "hello"

    def test_missing_uses_default(self) -> None:
        assert Arguments().get_str("text", "No text provided") == "No text provided"

    def test_null_uses_default(self) -> None:
        assert Arguments({"text": None}).get_str("text", "fallback") == "fallback"

    def test_empty_string_is_kept(self) -> None:
        assert Arguments({"text": ""}).get_str("text", "fallback") == ""

    def test_wrong_type(self) -> None:
        with pytest.raises(InvalidParamsError) as excinfo:
            Arguments({"text": 42}).get_str("text", "")
        assert excinfo.value.data == "text"


class TestGetBool:
    def test_present(self) -> None:
        assert Arguments({"detailed": True}).get_bool("detailed", False) is True

    def test_default(self) -> None:
        assert Arguments().get_bool("detailed", False) is False

    def test_wrong_type(self) -> None:
        with pytest.raises(InvalidParamsError, match="must be a boolean"):
            Arguments({"detailed": "yes"}).get_bool("detailed", False)
