"""Tests for anemos_ext.core.result module."""

import pytest

from anemos_ext.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    """Tests for Ok type."""

    def test_unwrap(self) -> None:
        assert Ok("1.2.0").unwrap() == "1.2.0"

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(42).unwrap_or(0) == 42

    def test_map(self) -> None:
        assert Ok(" 1.2.0\n").map(str.strip) == Ok("1.2.0")

    def test_map_err_is_noop(self) -> None:
        result = Ok(1)
        assert result.map_err(str) is result


class TestErr:
    """Tests for Err type."""

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err("boom").unwrap_or("fallback") == "fallback"

    def test_map_err(self) -> None:
        assert Err(404).map_err(lambda code: f"HTTP {code}") == Err("HTTP 404")

    def test_is_frozen(self) -> None:
        result = Err("boom")
        with pytest.raises(AttributeError):
            result.error = "other"  # type: ignore[misc]


class TestTypeGuards:
    def test_is_ok(self) -> None:
        result: Result[int, str] = Ok(1)
        assert is_ok(result)
        assert not is_err(result)

    def test_is_err(self) -> None:
        result: Result[int, str] = Err("x")
        assert is_err(result)
        assert not is_ok(result)

    def test_match(self) -> None:
        match Ok("anemos"):
            case Ok(value):
                assert value == "anemos"
            case Err():
                pytest.fail("expected Ok")
