"""Utility functions for the Flatcoin keeper."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from .exceptions import MaxRetriesExceededError, ValidationError
from .types import GAS_LIMIT_MARGIN_PERCENT

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Largest integer that survives a round trip through an IEEE-754 double
MAX_SAFE_INTEGER = 2**53 - 1


def pad_gas_limit(estimate: int, margin_percent: int = GAS_LIMIT_MARGIN_PERCENT) -> int:
    """Add a safety margin to a gas estimate using integer arithmetic."""
    estimate = int(estimate)
    if estimate < 0:
        raise ValidationError("Gas estimate cannot be negative", field="estimate", value=estimate)
    return estimate + estimate * margin_percent // 100


def to_quantity(value: Any) -> int:
    """Coerce a node-reported quantity (int or 0x-hex string) to int."""
    if isinstance(value, bool):
        raise ValidationError("Quantity must be numeric", field="quantity", value=value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 16) if value.lower().startswith("0x") else int(value)
        except ValueError as exc:
            raise ValidationError(
                "Quantity must be a valid integer string", field="quantity", value=value
            ) from exc
    raise ValidationError("Quantity must be numeric", field="quantity", value=value)


def to_safe_integer(value: Any, field: str = "value") -> int:
    """Convert an on-chain uint to int, refusing values outside the safe range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field=field, value=value)
    if value < 0 or value > MAX_SAFE_INTEGER:
        raise ValidationError(
            f"{field} is outside the safe integer range", field=field, value=value
        )
    return value


async def retry(
    func: Callable[[], Awaitable[T]],
    max_retries: int,
    delay_ms: int,
) -> T:
    """Await ``func`` until it succeeds, at most ``max_retries`` times.

    Waits ``delay_ms`` milliseconds after every failed attempt. There is no
    overall deadline; callers that need one must wrap this call themselves.
    """
    if max_retries < 1:
        raise ValidationError(
            "max_retries must be at least 1", field="max_retries", value=max_retries
        )

    name = getattr(func, "__name__", repr(func))
    last_error: Exception | None = None
    for retries in range(max_retries):
        try:
            return await func()
        except Exception as exc:
            last_error = exc
            logger.error("Error querying %s (retries: %s): %s", name, retries, exc)
            await asyncio.sleep(delay_ms / 1000)

    raise MaxRetriesExceededError(
        "Max retry attempts reached",
        attempts=max_retries,
        details={"function": name, "error": str(last_error)},
    ) from last_error
