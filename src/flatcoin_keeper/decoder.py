"""Decoding of custom contract revert data into named protocol errors."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from eth_abi import decode as abi_decode
from eth_typing import HexStr
from hexbytes import HexBytes
from web3 import Web3

from .abi import FlatcoinErrors_abi
from .exceptions import RevertDecodingError
from .types import DecodedRevert, ErrorSignature

logger = logging.getLogger(__name__)

ERROR_MARKER = "error="
CODE_MARKER = ", code="

# Solidity's built-in revert reasons, decoded alongside the protocol errors
BUILTIN_ERRORS_ABI: list[dict[str, Any]] = [
    {
        "inputs": [{"internalType": "string", "name": "reason", "type": "string"}],
        "name": "Error",
        "type": "error",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "code", "type": "uint256"}],
        "name": "Panic",
        "type": "error",
    },
]


class RevertDecoder:
    """Map ABI-encoded revert payloads onto declared error names.

    The selector table is built once at construction and never mutated, so a
    single decoder can be shared by any number of concurrent callers.
    """

    def __init__(
        self,
        error_abi: Iterable[Mapping[str, Any]] = FlatcoinErrors_abi,
        *,
        include_builtin: bool = True,
    ) -> None:
        entries = list(error_abi)
        if include_builtin:
            entries.extend(BUILTIN_ERRORS_ABI)

        table: dict[str, ErrorSignature] = {}
        for entry in entries:
            if entry.get("type") != "error":
                continue
            signature = ErrorSignature.from_abi(entry)
            table[signature.selector] = signature

        self._signatures = MappingProxyType(table)

    @property
    def signatures(self) -> Mapping[str, ErrorSignature]:
        return self._signatures

    @property
    def error_names(self) -> list[str]:
        return sorted(signature.name for signature in self._signatures.values())

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------
    def decode_revert_data(self, data: str | bytes) -> DecodedRevert:
        """Decode raw revert data, raising ``RevertDecodingError`` on failure."""

        try:
            payload = bytes(HexBytes(data))
        except (TypeError, ValueError) as exc:
            raise RevertDecodingError(
                "Revert data is not valid hex", data=str(data), details={"error": str(exc)}
            ) from exc

        if len(payload) < 4:
            raise RevertDecodingError("Revert data is shorter than a selector", data=str(data))

        selector = HexStr(Web3.to_hex(payload[:4]))
        signature = self._signatures.get(selector)
        if signature is None:
            raise RevertDecodingError(
                f"Unknown error selector {selector}", data=Web3.to_hex(payload)
            )

        try:
            values = abi_decode(list(signature.input_types), payload[4:])
        except Exception as exc:
            raise RevertDecodingError(
                f"Failed to decode arguments for {signature.name}",
                data=Web3.to_hex(payload),
                details={"error": str(exc)},
            ) from exc

        return DecodedRevert(
            name=signature.name,
            selector=selector,
            args=dict(zip(signature.input_names, values)),
        )

    def decode_gas_estimate_error(self, raw_error: Any) -> str:
        """Best-effort name of the contract error behind a failed gas estimate.

        Returns an empty string when nothing can be decoded. Errors raised by
        web3 carry the revert payload on ``data`` and are decoded directly;
        anything else is treated as a stringified JSON-RPC error and the JSON
        between ``error=`` and ``, code=`` is inspected. If that marker is
        missing the text is returned untouched.
        """

        if raw_error is None:
            return ""

        structured = _structured_revert_data(raw_error)
        if structured is not None:
            try:
                return self.decode_revert_data(structured).name
            except RevertDecodingError as exc:
                logger.error("can't get gas estimate error: %s", exc)
                return ""

        text = str(raw_error)
        if not text:
            return ""

        marker_index = text.find(ERROR_MARKER)
        if marker_index == -1:
            return text

        try:
            json_start = marker_index + len(ERROR_MARKER)
            json_end = text.find(CODE_MARKER, json_start)
            if json_end == -1:
                raise ValueError(f"missing {CODE_MARKER.strip(', ')} marker")
            error_json = json.loads(text[json_start:json_end])
            return self.decode_revert_data(error_json["error"]["data"]).name
        except Exception as exc:
            logger.error("can't get gas estimate error: %s", exc)
            return ""


def _structured_revert_data(raw_error: Any) -> str | bytes | None:
    if not isinstance(raw_error, BaseException):
        return None

    data = getattr(raw_error, "data", None)
    if isinstance(data, bytes | bytearray):
        return bytes(data)
    if isinstance(data, str) and data.startswith("0x"):
        return data
    return None
