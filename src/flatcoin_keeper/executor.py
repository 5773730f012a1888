"""Limit order execution and position reads against the Flatcoin contracts."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from hexbytes import HexBytes
from web3.types import RPCEndpoint

from .config import KeeperConfig
from .connections import Web3Connections
from .decoder import RevertDecoder
from .exceptions import GasEstimationError, ValidationError
from .types import EXECUTION_VALUE, PendingTransaction, PositionSnapshot
from .utils import pad_gas_limit, retry, to_quantity, to_safe_integer

logger = logging.getLogger(__name__)


class TransactionExecutor:
    """Submit limit order executions and serve position reads for a keeper."""

    def __init__(
        self,
        config: KeeperConfig,
        *,
        connections: Web3Connections | None = None,
        decoder: RevertDecoder | None = None,
    ) -> None:
        self._config = config
        self._connections = connections or Web3Connections(config)
        self._decoder = decoder or RevertDecoder()

    async def __aenter__(self) -> TransactionExecutor:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.disconnect()

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------
    async def connect(self) -> None:
        await self._connections.connect()

    async def disconnect(self) -> None:
        await self._connections.disconnect()

    def is_connected(self) -> bool:
        return self._connections.is_connected()

    @property
    def decoder(self) -> RevertDecoder:
        return self._decoder

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    async def execute_limit_order(
        self,
        token_id: int,
        price_feed_update_data: Sequence[bytes | str],
        nonce: int,
    ) -> str:
        """Estimate, sign, broadcast and confirm ``executeLimitOrder``.

        Returns the hash of the mined transaction. Gas estimation failures are
        not retried: they mean the order would revert on chain.
        """
        self._connections.ensure_connected()
        logger.info("executing limit order for position %s ...", token_id)

        update_data = _normalise_update_data(price_feed_update_data)
        web3 = self._connections.web3
        sender = self._connections.signer_address
        contract_function = self._connections.limit_order_contract.functions.executeLimitOrder(
            token_id, list(update_data)
        )

        try:
            estimated = await contract_function.estimate_gas(
                {"from": sender, "value": EXECUTION_VALUE}
            )
        except Exception as exc:
            error_name = self._decoder.decode_gas_estimate_error(exc)
            logger.error(
                "failed to estimate gas with error name: %s for tokenId: %s", error_name, token_id
            )
            raise GasEstimationError(
                f"Failed to estimate gas for tokenId {token_id}",
                token_id=token_id,
                error_name=error_name,
                details={"error": str(exc)},
            ) from exc

        logger.info("tx estimated: %s", estimated)

        priority_fee = await self.max_priority_fee_per_gas_with_retry(
            self._config.fee_retry_attempts, self._config.fee_retry_delay_ms
        )
        pending = PendingTransaction(
            token_id=token_id,
            price_update_data=update_data,
            gas_limit=pad_gas_limit(estimated),
            max_priority_fee_per_gas=priority_fee,
            nonce=nonce,
        )

        tx_params = await contract_function.build_transaction(pending.as_tx_params(sender))
        signed = self._connections.account.sign_transaction(tx_params)
        tx_hash = await web3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info(
            "Transaction sent for tokenId=%s hash=%s nonce=%s gas=%s",
            token_id,
            tx_hash.to_0x_hex(),
            pending.nonce,
            pending.gas_limit,
        )

        receipt = await web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self._config.receipt_timeout  # type: ignore[arg-type]
        )
        tx_hex = HexBytes(receipt["transactionHash"]).to_0x_hex()
        if receipt.get("status", 1) == 0:
            logger.warning("Transaction reverted for tokenId=%s hash=%s", token_id, tx_hex)
        else:
            logger.info(
                "Transaction confirmed for tokenId=%s hash=%s block=%s",
                token_id,
                tx_hex,
                receipt.get("blockNumber"),
            )
        return tx_hex

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    async def get_position_data_batched(self, token_ids: Sequence[int]) -> list[PositionSnapshot]:
        """Fetch positions concurrently, one call per id, in input order."""
        if not token_ids:
            return []

        contract = self._connections.viewer_single_contract
        try:
            results = await asyncio.gather(
                *(contract.functions.getPositionData(token_id).call() for token_id in token_ids)
            )
        except Exception as exc:
            logger.error("Failed to fetch position data for tokenIds %s: %s", list(token_ids), exc)
            raise

        return [PositionSnapshot.from_raw(result) for result in results]

    async def get_position_data_batched_from_to(
        self, token_id_from: int, token_id_to: int
    ) -> list[PositionSnapshot]:
        """Fetch the inclusive range ``[token_id_from, token_id_to]`` in one call."""
        if token_id_from > token_id_to:
            raise ValidationError(
                "tokenIdFrom must not exceed tokenIdTo",
                field="token_id_from",
                value=token_id_from,
                details={"token_id_to": token_id_to},
            )

        contract = self._connections.viewer_contract
        try:
            results = await contract.functions.getPositionData(token_id_from, token_id_to).call()
        except Exception as exc:
            logger.error(
                "Failed to fetch position data for tokenIds %s..%s: %s",
                token_id_from,
                token_id_to,
                exc,
            )
            raise

        return [PositionSnapshot.from_raw(result) for result in results]

    async def token_id_next(self) -> int:
        contract = self._connections.leverage_module_contract
        raw = await contract.functions.tokenIdNext().call()
        return to_safe_integer(raw, field="tokenIdNext")

    async def get_nonce(self) -> int:
        web3 = self._connections.web3
        return await web3.eth.get_transaction_count(self._connections.signer_address, "latest")

    async def max_priority_fee_per_gas(self) -> Any:
        """Ask the node for ``eth_maxPriorityFeePerGas`` without any fallback."""
        web3 = self._connections.web3
        return await web3.manager.coro_request(RPCEndpoint("eth_maxPriorityFeePerGas"), [])

    async def max_priority_fee_per_gas_with_retry(self, max_retries: int, delay_ms: int) -> int:
        raw = await retry(self.max_priority_fee_per_gas, max_retries, delay_ms)
        return to_quantity(raw)


def _normalise_update_data(price_feed_update_data: Sequence[bytes | str]) -> tuple[bytes, ...]:
    if isinstance(price_feed_update_data, str | bytes):
        raise ValidationError(
            "Price feed update data must be a sequence of blobs",
            field="price_feed_update_data",
            value=price_feed_update_data,
        )

    try:
        return tuple(bytes(HexBytes(item)) for item in price_feed_update_data)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            "Price feed update data must contain hex strings or bytes",
            field="price_feed_update_data",
            value=list(price_feed_update_data),
            details={"error": str(exc)},
        ) from exc
