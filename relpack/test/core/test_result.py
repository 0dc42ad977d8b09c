"""Tests for relpack.core.result module."""

import pytest

from relpack.core.result import Err, Ok, Result


class TestOk:
    def test_value(self) -> None:
        assert Ok("1.4.2").value == "1.4.2"

    def test_equality(self) -> None:
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(1)

    def test_repr(self) -> None:
        assert repr(Ok("v")) == "Ok('v')"


class TestErr:
    def test_error(self) -> None:
        assert Err("boom").error == "boom"

    def test_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"

    def test_frozen(self) -> None:
        result = Err("boom")
        with pytest.raises(AttributeError):
            result.error = "other"  # type: ignore[misc]


class TestMatching:
    def test_isinstance_narrowing(self) -> None:
        result: Result[int, str] = Ok(1)
        assert isinstance(result, Ok)
        assert not isinstance(result, Err)

    def test_pattern_matching(self) -> None:
        result: Result[int, str] = Err("bad")
        match result:
            case Ok(value):
                pytest.fail(f"unexpected Ok({value})")
            case Err(error):
                assert error == "bad"
