"""Type definitions and data models for the Flatcoin keeper."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from eth_typing import ChecksumAddress, HexStr
from web3 import Web3
from web3.types import TxParams, Wei

from .abi import POSITION_DATA_FIELDS
from .exceptions import ValidationError

TokenId = int
Address = str

# Fixed payment attached to every limit order execution for the keeper fee hook
EXECUTION_VALUE = Wei(1)

GAS_LIMIT_MARGIN_PERCENT = 40


@dataclass(frozen=True)
class PositionSnapshot:
    """Leverage position data as reported by the viewer contract."""

    token_id: int
    average_price: int
    margin_deposited: int
    additional_size: int
    entry_cumulative_funding: int
    profit_loss: int
    accrued_funding: int
    margin_after_settlement: int
    liquidation_price: int
    limit_order_price_lower_threshold: int
    limit_order_price_upper_threshold: int

    @classmethod
    def from_raw(cls, raw: Sequence[Any] | Mapping[str, Any]) -> "PositionSnapshot":
        """Build a snapshot from a decoded ``LeveragePositionData`` struct.

        web3 hands structs back as positional tuples, or as named tuples/mappings
        when ``decode_tuples`` is enabled; both shapes are accepted.
        """

        if isinstance(raw, Mapping):
            try:
                values = [raw[name] for name in POSITION_DATA_FIELDS]
            except KeyError as exc:
                raise ValidationError(
                    "Position data is missing a field",
                    field=str(exc.args[0]),
                    value=dict(raw),
                ) from exc
        else:
            values = list(raw)
            if len(values) != len(POSITION_DATA_FIELDS):
                raise ValidationError(
                    f"Expected {len(POSITION_DATA_FIELDS)} position fields, got {len(values)}",
                    field="positionData",
                    value=raw,
                )

        return cls(*(int(value) for value in values))


@dataclass(frozen=True)
class PendingTransaction:
    """A limit order execution about to be signed and broadcast."""

    token_id: int
    price_update_data: tuple[bytes, ...]
    gas_limit: int
    max_priority_fee_per_gas: int
    nonce: int
    value: Wei = EXECUTION_VALUE

    def as_tx_params(self, sender: ChecksumAddress) -> TxParams:
        """Return the overrides passed to ``build_transaction``."""

        return {
            "from": sender,
            "value": self.value,
            "gas": self.gas_limit,
            "maxPriorityFeePerGas": Wei(self.max_priority_fee_per_gas),
            "nonce": self.nonce,
        }


@dataclass(frozen=True)
class ErrorSignature:
    """A custom Solidity error declared by the protocol."""

    name: str
    input_names: tuple[str, ...]
    input_types: tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> HexStr:
        return HexStr(Web3.keccak(text=self.signature)[:4].to_0x_hex())

    @classmethod
    def from_abi(cls, entry: Mapping[str, Any]) -> "ErrorSignature":
        inputs = entry.get("inputs") or []
        return cls(
            name=entry["name"],
            input_names=tuple(item.get("name", "") for item in inputs),
            input_types=tuple(_canonical_type(item) for item in inputs),
        )


@dataclass(frozen=True)
class DecodedRevert:
    """Revert data matched against a known error signature."""

    name: str
    selector: HexStr
    args: dict[str, Any] = field(default_factory=dict)


def _canonical_type(item: Mapping[str, Any]) -> str:
    abi_type = item["type"]
    if not abi_type.startswith("tuple"):
        return abi_type

    suffix = abi_type[len("tuple") :]
    components = ",".join(_canonical_type(component) for component in item["components"])
    return f"({components}){suffix}"
