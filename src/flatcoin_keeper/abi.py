"""Contract ABIs for the deployed Flatcoin modules.

These mirror the deployed contracts and must not be edited independently of
them.
"""

from typing import Any

_LEVERAGE_POSITION_DATA_COMPONENTS: list[dict[str, Any]] = [
    {"internalType": "uint256", "name": "tokenId", "type": "uint256"},
    {"internalType": "uint256", "name": "averagePrice", "type": "uint256"},
    {"internalType": "uint256", "name": "marginDeposited", "type": "uint256"},
    {"internalType": "uint256", "name": "additionalSize", "type": "uint256"},
    {"internalType": "int256", "name": "entryCumulativeFunding", "type": "int256"},
    {"internalType": "int256", "name": "profitLoss", "type": "int256"},
    {"internalType": "int256", "name": "accruedFunding", "type": "int256"},
    {"internalType": "int256", "name": "marginAfterSettlement", "type": "int256"},
    {"internalType": "uint256", "name": "liquidationPrice", "type": "uint256"},
    {"internalType": "uint256", "name": "limitOrderPriceLowerThreshold", "type": "uint256"},
    {"internalType": "uint256", "name": "limitOrderPriceUpperThreshold", "type": "uint256"},
]

POSITION_DATA_FIELDS: tuple[str, ...] = tuple(
    component["name"] for component in _LEVERAGE_POSITION_DATA_COMPONENTS
)

LimitOrder_abi: list[dict[str, Any]] = [
    {
        "inputs": [
            {"internalType": "uint256", "name": "tokenId", "type": "uint256"},
            {"internalType": "bytes[]", "name": "priceUpdateData", "type": "bytes[]"},
        ],
        "name": "executeLimitOrder",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]

ViewerGetPositionData_abi: list[dict[str, Any]] = [
    {
        "inputs": [{"internalType": "uint256", "name": "tokenId", "type": "uint256"}],
        "name": "getPositionData",
        "outputs": [
            {
                "components": _LEVERAGE_POSITION_DATA_COMPONENTS,
                "internalType": "struct FlatcoinStructs.LeveragePositionData",
                "name": "positionData",
                "type": "tuple",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
]

Viewer_abi: list[dict[str, Any]] = [
    {
        "inputs": [
            {"internalType": "uint256", "name": "tokenIdFrom", "type": "uint256"},
            {"internalType": "uint256", "name": "tokenIdTo", "type": "uint256"},
        ],
        "name": "getPositionData",
        "outputs": [
            {
                "components": _LEVERAGE_POSITION_DATA_COMPONENTS,
                "internalType": "struct FlatcoinStructs.LeveragePositionData[]",
                "name": "positionData",
                "type": "tuple[]",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
]

LeverageModule_abi: list[dict[str, Any]] = [
    {
        "inputs": [],
        "name": "tokenIdNext",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]


def _error(name: str, *inputs: tuple[str, str]) -> dict[str, Any]:
    return {
        "inputs": [
            {"internalType": abi_type, "name": input_name, "type": abi_type}
            for input_name, abi_type in inputs
        ],
        "name": name,
        "type": "error",
    }


FlatcoinErrors_abi: list[dict[str, Any]] = [
    _error("AmountTooSmall", ("amount", "uint256"), ("minAmount", "uint256")),
    _error("CannotLiquidate", ("tokenId", "uint256")),
    _error("DepositCapReached", ("collateralCap", "uint256")),
    _error("ETHPriceInvalid"),
    _error("ETHPriceStale"),
    _error("ExecutableTimeNotReached", ("executableTime", "uint256")),
    _error("HighSlippage", ("supplied", "uint256"), ("accepted", "uint256")),
    _error("InvalidFee", ("fee", "uint256")),
    _error("InvalidThresholds", ("priceLowerThreshold", "uint256"), ("priceUpperThreshold", "uint256")),
    _error("LeverageTooHigh", ("leverageMax", "uint256"), ("leverage", "uint256")),
    _error("LeverageTooLow", ("leverageMin", "uint256"), ("leverage", "uint256")),
    _error("LimitOrderInvalid", ("tokenId", "uint256")),
    _error(
        "LimitOrderPriceNotInRange",
        ("price", "uint256"),
        ("priceLowerThreshold", "uint256"),
        ("priceUpperThreshold", "uint256"),
    ),
    _error("MarginTooSmall", ("marginMin", "uint256"), ("margin", "uint256")),
    _error("MaxSkewReached", ("skewFraction", "uint256")),
    _error("MaxVarianceExceeded", ("variableName", "string")),
    _error("ModuleKeyEmpty"),
    _error("NotEnoughMarginForFees", ("marginAmount", "int256"), ("feeAmount", "uint256")),
    _error("NotTokenOwner", ("tokenId", "uint256"), ("msgSender", "address")),
    _error("OnlyAuthorizedModule", ("msgSender", "address")),
    _error("OrderHasExpired"),
    _error("OrderHasNotExpired"),
    _error("OrderInvalid", ("account", "address")),
    _error("Paused", ("moduleKey", "bytes32")),
    _error("PositionCreatesBadDebt"),
    _error("PriceImpactDuringFullWithdraw"),
    _error("PriceImpactDuringWithdraw"),
    _error("PriceInvalid", ("priceSource", "uint8")),
    _error("PriceMismatch", ("diffPercent", "uint256")),
    _error("PriceStale", ("priceSource", "uint8")),
    _error("RefundFailed"),
    _error("ValueNotPositive", ("variableName", "string")),
    _error("ZeroAddress", ("variableName", "string")),
    _error("ZeroValue", ("variableName", "string")),
]
