"""Tests for setup_cmake.core.result module."""

import pytest

from setup_cmake.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    """Tests for Ok type."""

    def test_ok_is_ok(self) -> None:
        """Ok.is_ok() returns True and is_err() False."""
        result = Ok(42)
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_ok_unwrap(self) -> None:
        """Ok.unwrap() returns the value."""
        assert Ok("3.19.3").unwrap() == "3.19.3"

    def test_ok_unwrap_or(self) -> None:
        """Ok.unwrap_or() ignores the default."""
        assert Ok(42).unwrap_or(0) == 42

    def test_ok_map(self) -> None:
        """Ok.map() transforms the value."""
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_ok_repr(self) -> None:
        assert repr(Ok(42)) == "Ok(42)"


class TestErr:
    """Tests for Err type."""

    def test_err_is_err(self) -> None:
        """Err.is_err() returns True and is_ok() False."""
        result = Err("boom")
        assert result.is_err() is True
        assert result.is_ok() is False

    def test_err_unwrap_raises(self) -> None:
        """Err.unwrap() raises ValueError mentioning the error."""
        with pytest.raises(ValueError, match="called unwrap on Err: boom"):
            Err("boom").unwrap()

    def test_err_unwrap_or(self) -> None:
        """Err.unwrap_or() returns the default."""
        assert Err("boom").unwrap_or(7) == 7

    def test_err_map_is_identity(self) -> None:
        """Err.map() does not call the function."""
        err: Err[str] = Err("boom")
        assert err.map(lambda x: x * 2) is err

    def test_err_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"


class TestTypeGuards:
    """Tests for is_ok / is_err helpers."""

    def test_is_ok(self) -> None:
        result: Result[int, str] = Ok(1)
        assert is_ok(result) is True
        assert is_err(result) is False

    def test_is_err(self) -> None:
        result: Result[int, str] = Err("x")
        assert is_ok(result) is False
        assert is_err(result) is True

    def test_pattern_matching(self) -> None:
        """Results destructure with match."""
        result: Result[int, str] = Err("bad")
        match result:
            case Ok(value):
                pytest.fail(f"unexpected Ok({value})")
            case Err(error):
                assert error == "bad"
