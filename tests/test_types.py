"""Tests for flatcoin_keeper.types data models."""

from typing import cast

import pytest
from web3 import Web3
from web3.types import ChecksumAddress

from flatcoin_keeper.abi import POSITION_DATA_FIELDS
from flatcoin_keeper.exceptions import ValidationError
from flatcoin_keeper.types import ErrorSignature, PendingTransaction, PositionSnapshot

_RAW_POSITION = (42, 2000, 50, 100, -3, 7, -1, 56, 1500, 1900, 2100)


def test_position_snapshot_from_tuple() -> None:
    snapshot = PositionSnapshot.from_raw(_RAW_POSITION)

    assert snapshot.token_id == 42
    assert snapshot.average_price == 2000
    assert snapshot.entry_cumulative_funding == -3
    assert snapshot.margin_after_settlement == 56
    assert snapshot.limit_order_price_lower_threshold == 1900
    assert snapshot.limit_order_price_upper_threshold == 2100


def test_position_snapshot_from_mapping() -> None:
    raw = dict(zip(POSITION_DATA_FIELDS, _RAW_POSITION))
    assert PositionSnapshot.from_raw(raw) == PositionSnapshot.from_raw(_RAW_POSITION)


def test_position_snapshot_wrong_arity() -> None:
    with pytest.raises(ValidationError):
        PositionSnapshot.from_raw(_RAW_POSITION[:-1])


def test_position_snapshot_missing_field() -> None:
    raw = dict(zip(POSITION_DATA_FIELDS, _RAW_POSITION))
    del raw["liquidationPrice"]

    with pytest.raises(ValidationError) as excinfo:
        PositionSnapshot.from_raw(raw)
    assert excinfo.value.field == "liquidationPrice"


def test_position_snapshot_is_immutable() -> None:
    snapshot = PositionSnapshot.from_raw(_RAW_POSITION)
    with pytest.raises(AttributeError):
        snapshot.token_id = 1  # type: ignore[misc]


def test_pending_transaction_params() -> None:
    sender = cast(ChecksumAddress, "0x0000000000000000000000000000000000000009")
    pending = PendingTransaction(
        token_id=3,
        price_update_data=(b"\x01",),
        gas_limit=1400,
        max_priority_fee_per_gas=2,
        nonce=11,
    )

    assert pending.as_tx_params(sender) == {
        "from": sender,
        "value": 1,
        "gas": 1400,
        "maxPriorityFeePerGas": 2,
        "nonce": 11,
    }


def test_error_signature_from_abi() -> None:
    signature = ErrorSignature.from_abi(
        {
            "inputs": [
                {"name": "tokenId", "type": "uint256"},
                {"name": "msgSender", "type": "address"},
            ],
            "name": "NotTokenOwner",
            "type": "error",
        }
    )

    assert signature.signature == "NotTokenOwner(uint256,address)"
    assert signature.input_names == ("tokenId", "msgSender")
    assert signature.selector == Web3.keccak(text="NotTokenOwner(uint256,address)")[:4].to_0x_hex()


def test_error_signature_with_tuple_input() -> None:
    signature = ErrorSignature.from_abi(
        {
            "inputs": [
                {
                    "name": "bounds",
                    "type": "tuple[]",
                    "components": [
                        {"name": "low", "type": "uint256"},
                        {"name": "high", "type": "uint256"},
                    ],
                }
            ],
            "name": "BadBounds",
            "type": "error",
        }
    )

    assert signature.signature == "BadBounds((uint256,uint256)[])"
