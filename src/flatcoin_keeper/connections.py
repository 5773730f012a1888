"""Connection helpers for the Flatcoin keeper."""

from __future__ import annotations

import logging
from typing import cast

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.contract import AsyncContract
from web3.types import ChecksumAddress

from .abi import LeverageModule_abi, LimitOrder_abi, Viewer_abi, ViewerGetPositionData_abi
from .config import KeeperConfig
from .exceptions import NetworkError, ValidationError

logger = logging.getLogger(__name__)


class Web3Connections:
    """Manage the async Web3 provider, signer account, and contract handles."""

    def __init__(self, config: KeeperConfig):
        self.config = config
        self._provider: AsyncHTTPProvider | None = None
        self._web3: AsyncWeb3 | None = None
        self._account: LocalAccount | None = None
        self._limit_order_contract: AsyncContract | None = None
        self._viewer_contract: AsyncContract | None = None
        self._viewer_single_contract: AsyncContract | None = None
        self._leverage_module_contract: AsyncContract | None = None
        self._connected = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def connect(self) -> None:
        """Initialise the provider, signer and contract handles."""

        try:
            signer = cast(LocalAccount, Account.from_key(self.config.private_key))
        except Exception as exc:
            raise ValidationError(
                "Failed to derive signer account from provided private key",
                field="private_key",
                details={"error": str(exc)},
            ) from exc

        provider = AsyncHTTPProvider(
            self.config.rpc_url, request_kwargs={"timeout": self.config.request_timeout}
        )
        web3 = AsyncWeb3(provider)
        if not await web3.is_connected():
            raise NetworkError("Unable to connect to RPC", endpoint=self.config.rpc_url)

        self._account = signer
        self._provider = provider
        self._web3 = web3
        self._limit_order_contract = web3.eth.contract(
            address=self.config.limit_order_address, abi=LimitOrder_abi
        )
        self._viewer_contract = web3.eth.contract(
            address=self.config.viewer_address, abi=Viewer_abi
        )
        self._viewer_single_contract = web3.eth.contract(
            address=self.config.viewer_address, abi=ViewerGetPositionData_abi
        )
        self._leverage_module_contract = web3.eth.contract(
            address=self.config.leverage_module_address, abi=LeverageModule_abi
        )

        self._connected = True
        logger.info("Connected to RPC at %s as %s", self.config.rpc_url, signer.address)

    async def disconnect(self) -> None:
        provider = self._provider
        self._provider = None
        self._web3 = None
        self._account = None
        self._limit_order_contract = None
        self._viewer_contract = None
        self._viewer_single_contract = None
        self._leverage_module_contract = None
        self._connected = False

        if provider is not None:
            await provider.disconnect()

    def is_connected(self) -> bool:
        return self._connected and self._web3 is not None

    def ensure_connected(self) -> None:
        if not self.is_connected():
            raise NetworkError("Keeper is not connected", endpoint=self.config.rpc_url)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def web3(self) -> AsyncWeb3:
        if self._web3 is None:
            raise NetworkError("RPC provider not connected", endpoint=self.config.rpc_url)
        return self._web3

    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            raise NetworkError(
                "Signer account is not initialised; call connect() first",
                endpoint=self.config.rpc_url,
            )
        return self._account

    @property
    def signer_address(self) -> ChecksumAddress:
        return self.account.address

    @property
    def limit_order_contract(self) -> AsyncContract:
        return self._require_contract(self._limit_order_contract, "Limit order")

    @property
    def viewer_contract(self) -> AsyncContract:
        return self._require_contract(self._viewer_contract, "Viewer")

    @property
    def viewer_single_contract(self) -> AsyncContract:
        return self._require_contract(self._viewer_single_contract, "Viewer")

    @property
    def leverage_module_contract(self) -> AsyncContract:
        return self._require_contract(self._leverage_module_contract, "Leverage module")

    def _require_contract(self, contract: AsyncContract | None, label: str) -> AsyncContract:
        if contract is None:
            raise NetworkError(
                f"{label} contract not available; call connect() first",
                endpoint=self.config.rpc_url,
            )
        return contract
