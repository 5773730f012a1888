"""Example: Read leverage positions and keeper state from the viewer contract."""

from __future__ import annotations

import asyncio
import logging

from dotenv import load_dotenv

from flatcoin_keeper import KeeperConfig, TransactionExecutor

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

PAGE_SIZE = 20


async def main() -> None:
    """Print every open position's limit order thresholds."""

    config = KeeperConfig.from_env()

    async with TransactionExecutor(config) as executor:
        next_token_id = await executor.token_id_next()
        nonce = await executor.get_nonce()
        print(f"Next token id: {next_token_id}, signer nonce: {nonce}")

        if next_token_id == 0:
            print("No positions minted yet")
            return

        for start in range(0, next_token_id, PAGE_SIZE):
            end = min(start + PAGE_SIZE, next_token_id) - 1
            for position in await executor.get_position_data_batched_from_to(start, end):
                print(
                    f"#{position.token_id}: margin={position.margin_deposited} "
                    f"lower={position.limit_order_price_lower_threshold} "
                    f"upper={position.limit_order_price_upper_threshold}"
                )

        sample = list(range(max(0, next_token_id - 3), next_token_id))
        positions = await executor.get_position_data_batched(sample)
        print(f"Latest positions: {[position.token_id for position in positions]}")


if __name__ == "__main__":
    asyncio.run(main())
