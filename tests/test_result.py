"""Tests for Ok/Err result values."""

import pytest

from chord_layout.result import Err, Ok, UnwrapError


class TestResult:
    def test_ok(self) -> None:
        result = Ok(3)
        assert result.is_ok
        assert not result.is_err
        assert result.unwrap() == 3

    def test_err(self) -> None:
        result = Err("boom")
        assert result.is_err
        assert not result.is_ok
        with pytest.raises(UnwrapError, match="boom"):
            result.unwrap()

    def test_equality(self) -> None:
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(1)
