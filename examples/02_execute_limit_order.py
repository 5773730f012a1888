"""Example: Execute a limit order with a fresh price feed update."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv

from flatcoin_keeper import GasEstimationError, KeeperConfig, TransactionExecutor

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


async def main() -> None:
    """Execute the limit order of TOKEN_ID using PRICE_UPDATE_DATA (comma separated hex)."""

    token_id = os.getenv("TOKEN_ID")
    if not token_id:
        raise ValueError("TOKEN_ID not found in environment variables")
    update_data = [blob for blob in os.getenv("PRICE_UPDATE_DATA", "").split(",") if blob]

    config = KeeperConfig.from_env()

    async with TransactionExecutor(config) as executor:
        nonce = await executor.get_nonce()
        try:
            tx_hash = await executor.execute_limit_order(int(token_id), update_data, nonce)
        except GasEstimationError as exc:
            print(f"Order not executable: {exc.error_name or exc.message}")
            return

        print(f"Limit order executed: {tx_hash}")


if __name__ == "__main__":
    asyncio.run(main())
