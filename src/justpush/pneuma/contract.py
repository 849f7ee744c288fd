"""
Contract handle - constant calls and signed transactions.

Parameters are ABI-encoded locally with eth-abi; the node builds the
transaction from ``function_selector`` + ``parameter`` and we sign and
broadcast it.
"""

from __future__ import annotations

from typing import Any, Optional

from eth_abi import decode, encode

from ..errors import TronError, TransactionFailedError
from ..sigil.tron import to_base58_address, to_evm_address, to_hex_address
from ..utils import decode_node_message
from .abi import ContractArtifact
from .client import TronClient

DEFAULT_FEE_LIMIT = 100_000_000  # 100 TRX in sun

# keccak256("Error(string)")[:4]
_ERROR_SELECTOR = bytes.fromhex("08c379a0")


class ContractRevertError(TronError):
    """A constant call or transaction was reverted by the contract."""


def abi_type(param: dict[str, Any]) -> str:
    """Canonical type string for an ABI parameter, expanding tuples."""
    type_ = param["type"]
    if type_.startswith("tuple"):
        inner = ",".join(abi_type(c) for c in param.get("components", []))
        return f"({inner}){type_[len('tuple'):]}"
    return type_


def _is_array(type_: str) -> bool:
    return type_.endswith("]")


def _element_param(param: dict[str, Any]) -> dict[str, Any]:
    element = dict(param)
    element["type"] = param["type"][: param["type"].rindex("[")]
    return element


def _to_abi_value(param: dict[str, Any], value: Any) -> Any:
    """Convert TRON-style addresses to the 20-byte form eth-abi expects."""
    type_ = param["type"]
    if _is_array(type_):
        element = _element_param(param)
        return [_to_abi_value(element, v) for v in value]
    if type_ == "address":
        return to_evm_address(value)
    if type_ == "tuple":
        return tuple(
            _to_abi_value(c, v) for c, v in zip(param.get("components", []), value)
        )
    return value


def _from_abi_value(param: dict[str, Any], value: Any) -> Any:
    """Convert decoded values back to TRON form, naming tuple fields."""
    type_ = param["type"]
    if _is_array(type_):
        element = _element_param(param)
        return [_from_abi_value(element, v) for v in value]
    if type_ == "address":
        return to_base58_address(value)
    if type_ == "tuple":
        components = param.get("components", [])
        values = [_from_abi_value(c, v) for c, v in zip(components, value)]
        if components and all(c.get("name") for c in components):
            return {c["name"]: v for c, v in zip(components, values)}
        return tuple(values)
    return value


def revert_reason(data: bytes) -> Optional[str]:
    """Extract the Error(string) reason from revert data, if present."""
    if not data.startswith(_ERROR_SELECTOR):
        return None
    try:
        (reason,) = decode(["string"], data[4:])
    except Exception:
        return None
    return reason


class Contract:
    """A deployed contract bound to a signing client."""

    def __init__(self, client: TronClient, artifact: ContractArtifact, address: str) -> None:
        self.client = client
        self.artifact = artifact
        self.address = to_base58_address(address)

    @classmethod
    def for_network(cls, client: TronClient, artifact: ContractArtifact, network_id: str) -> "Contract":
        return cls(client, artifact, artifact.address_for(network_id))

    def __repr__(self) -> str:
        return f"Contract({self.artifact.name} at {self.address})"

    def _trigger_payload(self, function_name: str, args: list) -> dict[str, Any]:
        func = self.artifact.function(function_name)
        inputs = func.get("inputs", [])
        if len(args) != len(inputs):
            raise ValueError(
                f"{function_name} expects {len(inputs)} arguments, got {len(args)}"
            )

        input_types = [abi_type(p) for p in inputs]
        values = [_to_abi_value(p, a) for p, a in zip(inputs, args)]
        parameter = encode(input_types, values).hex() if values else ""

        return {
            "owner_address": to_hex_address(self.client.address),
            "contract_address": to_hex_address(self.address),
            "function_selector": f"{function_name}({','.join(input_types)})",
            "parameter": parameter,
        }

    def _check_trigger(self, function_name: str, result: dict[str, Any]) -> None:
        status = result.get("result", {})
        if status.get("result"):
            return

        message = decode_node_message(status.get("message", ""))
        constant = result.get("constant_result") or []
        reason = revert_reason(bytes.fromhex(constant[0])) if constant else None
        if reason is not None or "REVERT" in message.upper():
            raise ContractRevertError(f"{function_name} reverted: {reason or message}")

        code = status.get("code", "UNKNOWN")
        raise TronError(f"{function_name} rejected ({code}): {message}")

    def call(self, function_name: str, args: Optional[list] = None) -> Any:
        """
        Run a constant (read-only) call.

        Args:
            function_name: Function to call
            args: Function arguments (default: [])

        Returns:
            Decoded return value (single value or tuple), None for empty output

        Raises:
            ContractRevertError: If the call reverts
            TronError: If the node rejects the call
        """
        payload = self._trigger_payload(function_name, args or [])
        result = self.client.post("/wallet/triggerconstantcontract", payload)
        self._check_trigger(function_name, result)

        constant = result.get("constant_result") or [""]
        raw = bytes.fromhex(constant[0])

        ret = (result.get("transaction") or {}).get("ret") or [{}]
        if ret[0].get("ret") == "FAILED":
            reason = revert_reason(raw)
            raise ContractRevertError(f"{function_name} reverted: {reason or 'no reason'}")

        outputs = self.artifact.function(function_name).get("outputs", [])
        if not outputs or not raw:
            return None

        decoded = decode([abi_type(p) for p in outputs], raw)
        values = [_from_abi_value(p, v) for p, v in zip(outputs, decoded)]

        if len(values) == 1:
            return values[0]
        if all(p.get("name") for p in outputs):
            return {p["name"]: v for p, v in zip(outputs, values)}
        return tuple(values)

    def send(
        self,
        function_name: str,
        args: Optional[list] = None,
        fee_limit: int = DEFAULT_FEE_LIMIT,
        call_value: int = 0,
        wait: bool = True,
        timeout: float = 60,
    ) -> dict[str, Any]:
        """
        Build, sign, and broadcast a contract transaction.

        Args:
            function_name: Function to call
            args: Function arguments
            fee_limit: Maximum energy fee in sun
            call_value: TRX value in sun
            wait: Whether to wait for the receipt
            timeout: Receipt wait timeout

        Returns:
            Dict with txid and, when waiting, receipt

        Raises:
            TransactionFailedError: If the transaction was mined but failed
        """
        payload = self._trigger_payload(function_name, args or [])
        payload["fee_limit"] = fee_limit
        payload["call_value"] = call_value

        result = self.client.post("/wallet/triggersmartcontract", payload)
        self._check_trigger(function_name, result)

        signed = self.client.sign(result["transaction"])
        txid = self.client.broadcast(signed)
        outcome: dict[str, Any] = {"txid": txid}

        if wait:
            receipt = self.client.wait_for_receipt(txid, timeout=timeout)
            outcome["receipt"] = receipt
            execution = receipt.get("receipt", {}).get("result", "SUCCESS")
            if receipt.get("result") == "FAILED" or execution != "SUCCESS":
                message = decode_node_message(receipt.get("resMessage", "")) or execution
                raise TransactionFailedError(
                    f"{function_name} transaction {txid} failed: {message}",
                    receipt=receipt,
                )

        return outcome
