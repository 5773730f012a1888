"""Tests for utility functions."""

import pytest

from flatcoin_keeper.exceptions import MaxRetriesExceededError, ValidationError
from flatcoin_keeper.utils import (
    MAX_SAFE_INTEGER,
    pad_gas_limit,
    retry,
    to_quantity,
    to_safe_integer,
)


class TestGasLimitPadding:
    """Test the 40% gas limit margin."""

    def test_pad_round_estimate(self):
        assert pad_gas_limit(1000) == 1400

    def test_pad_truncates_fraction(self):
        assert pad_gas_limit(3) == 4

    def test_pad_zero(self):
        assert pad_gas_limit(0) == 0

    def test_pad_large_estimate_stays_exact(self):
        estimate = 10**30 + 7
        assert pad_gas_limit(estimate) == estimate + (estimate * 40) // 100

    def test_pad_negative_raises_error(self):
        with pytest.raises(ValidationError):
            pad_gas_limit(-1)


class TestQuantityCoercion:
    """Test node quantity coercion."""

    def test_int_passthrough(self):
        assert to_quantity(1_500_000_000) == 1_500_000_000

    def test_hex_string(self):
        assert to_quantity("0x59682f00") == 1_500_000_000

    def test_decimal_string(self):
        assert to_quantity("42") == 42

    def test_invalid_string_raises_error(self):
        with pytest.raises(ValidationError):
            to_quantity("0xnope")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            to_quantity(True)

    def test_none_rejected(self):
        with pytest.raises(ValidationError):
            to_quantity(None)


class TestSafeInteger:
    """Test the safe integer guard."""

    def test_within_range(self):
        assert to_safe_integer(123, field="tokenIdNext") == 123

    def test_upper_bound_inclusive(self):
        assert to_safe_integer(MAX_SAFE_INTEGER) == MAX_SAFE_INTEGER

    def test_above_range_raises_error(self):
        with pytest.raises(ValidationError) as excinfo:
            to_safe_integer(MAX_SAFE_INTEGER + 1, field="tokenIdNext")
        assert excinfo.value.field == "tokenIdNext"

    def test_negative_raises_error(self):
        with pytest.raises(ValidationError):
            to_safe_integer(-1)

    def test_non_integer_raises_error(self):
        with pytest.raises(ValidationError):
            to_safe_integer("12")


class TestRetry:
    """Test the bounded retry helper."""

    @pytest.fixture
    def sleeps(self, monkeypatch):
        delays: list[float] = []

        async def fake_sleep(delay):
            delays.append(delay)

        monkeypatch.setattr("flatcoin_keeper.utils.asyncio.sleep", fake_sleep)
        return delays

    @pytest.mark.asyncio
    async def test_always_failing_makes_exact_attempts(self, sleeps):
        calls = 0

        async def always_fails():
            nonlocal calls
            calls += 1
            raise ConnectionError("node busy")

        with pytest.raises(MaxRetriesExceededError) as excinfo:
            await retry(always_fails, 3, 500)

        assert calls == 3
        assert sleeps == [0.5, 0.5, 0.5]
        assert excinfo.value.attempts == 3
        assert "Max retry attempts reached" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("succeed_on", [1, 2, 3])
    async def test_success_stops_retrying(self, sleeps, succeed_on):
        calls = 0

        async def flaky():
            nonlocal calls
            calls += 1
            if calls < succeed_on:
                raise ConnectionError("node busy")
            return "0x3b9aca00"

        result = await retry(flaky, 3, 500)

        assert result == "0x3b9aca00"
        assert calls == succeed_on
        assert len(sleeps) == succeed_on - 1

    @pytest.mark.asyncio
    async def test_failure_is_logged_with_retry_count(self, sleeps, caplog):
        async def max_priority_fee_per_gas():
            raise ConnectionError("boom")

        with caplog.at_level("ERROR", logger="flatcoin_keeper.utils"):
            with pytest.raises(MaxRetriesExceededError):
                await retry(max_priority_fee_per_gas, 2, 10)

        messages = [record.getMessage() for record in caplog.records]
        assert "Error querying max_priority_fee_per_gas (retries: 0): boom" in messages
        assert "Error querying max_priority_fee_per_gas (retries: 1): boom" in messages

    @pytest.mark.asyncio
    async def test_zero_retries_rejected(self, sleeps):
        async def never_called():
            raise AssertionError("should not be awaited")

        with pytest.raises(ValidationError):
            await retry(never_called, 0, 500)
