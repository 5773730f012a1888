"""Configuration container for the Flatcoin keeper."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from web3 import Web3
from web3.types import ChecksumAddress

from .exceptions import ValidationError

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_FEE_RETRY_ATTEMPTS = 3
DEFAULT_FEE_RETRY_DELAY_MS = 500

ENV_RPC_URL = "PROVIDER_HTTPS_URL"
ENV_PRIVATE_KEY = "SIGNER_WALLET_PK"
ENV_LIMIT_ORDER_ADDRESS = "LIMIT_ORDER_CONTRACT_ADDRESS"
ENV_VIEWER_ADDRESS = "VIEWER_CONTRACT_ADDRESS"
ENV_LEVERAGE_MODULE_ADDRESS = "LEVERAGE_MODULE_CONTRACT_ADDRESS"


@dataclass(frozen=True)
class KeeperConfig:
    """Process-wide settings, built once at startup and shared by reference."""

    rpc_url: str
    private_key: str
    limit_order_address: ChecksumAddress
    viewer_address: ChecksumAddress
    leverage_module_address: ChecksumAddress
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    # None waits for the receipt until the transport gives up
    receipt_timeout: float | None = None
    fee_retry_attempts: int = DEFAULT_FEE_RETRY_ATTEMPTS
    fee_retry_delay_ms: int = DEFAULT_FEE_RETRY_DELAY_MS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> KeeperConfig:
        """Read the keeper settings from environment variables."""

        env = os.environ if environ is None else environ

        return cls(
            rpc_url=_require(env, ENV_RPC_URL),
            private_key=_require(env, ENV_PRIVATE_KEY),
            limit_order_address=_checksum(env, ENV_LIMIT_ORDER_ADDRESS),
            viewer_address=_checksum(env, ENV_VIEWER_ADDRESS),
            leverage_module_address=_checksum(env, ENV_LEVERAGE_MODULE_ADDRESS),
        )


def _require(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ValidationError(f"{name} not found in environment variables", field=name)
    return value


def _checksum(env: Mapping[str, str], name: str) -> ChecksumAddress:
    raw = _require(env, name)
    try:
        return Web3.to_checksum_address(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"{name} is not a valid address",
            field=name,
            value=raw,
            details={"error": str(exc)},
        ) from exc
