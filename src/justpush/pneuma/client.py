"""
TRON Client Factory and HTTP API transport.

Builds a signing client for a named network. Remote calls go to the
full node HTTP API (``/wallet/*``) through httpx.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx

from ..errors import ConfigError, TronError
from ..sigil.tron import get_address, load_private_key, sign_txid
from ..utils import decode_node_message

PRODUCTION_NETWORK = "tron"
PRODUCTION_HOST = "https://api.trongrid.io"
DEFAULT_NETWORK = "nile"

# Network ids as written into build/contracts/*.json by the deploy tooling.
NETWORK_IDS: dict[str, str] = {
    "tron": "1",
    "shasta": "2",
    "nile": "3",
}

API_KEY_HEADER = "TRON-PRO-API-KEY"


def resolve_host(network: str) -> str:
    """Map a network identifier to its TronGrid endpoint."""
    if network == PRODUCTION_NETWORK:
        return PRODUCTION_HOST
    return f"https://api.{network}.trongrid.io"


def resolve_network_id(network: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Artifact network id for a network, JUSTPUSH_NETWORK_ID overrides."""
    env = os.environ if env is None else env
    override = env.get("JUSTPUSH_NETWORK_ID")
    if override:
        return override
    try:
        return NETWORK_IDS[network]
    except KeyError:
        raise ConfigError(
            f"No network id known for '{network}'. Set JUSTPUSH_NETWORK_ID."
        ) from None


@dataclass
class TronClient:
    """Signing handle bound to one TRON host."""

    host: str
    private_key: str = field(repr=False)
    api_key: Optional[str] = field(default=None, repr=False)
    timeout: float = 30
    transport: Optional[httpx.BaseTransport] = field(default=None, repr=False)

    @property
    def address(self) -> str:
        """Base58 address of the signing key."""
        return get_address(self.private_key)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers[API_KEY_HEADER] = self.api_key
        return headers

    def post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        POST to the node HTTP API.

        Args:
            path: API path (e.g., "/wallet/triggersmartcontract")
            payload: JSON body

        Returns:
            Decoded JSON response

        Raises:
            TronError: If the node returns an error document
        """
        with httpx.Client(
            base_url=self.host,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self.transport,
        ) as client:
            response = client.post(path, json=payload)
            response.raise_for_status()
            data = response.json()

        if isinstance(data, dict) and "Error" in data:
            raise TronError(f"Node error: {data['Error']}")

        return data

    def sign(self, transaction: dict[str, Any]) -> dict[str, Any]:
        signed = dict(transaction)
        signed["signature"] = [sign_txid(transaction["txID"], self.private_key)]
        return signed

    def broadcast(self, transaction: dict[str, Any]) -> str:
        """
        Broadcast a signed transaction.

        Returns:
            Transaction id
        """
        result = self.post("/wallet/broadcasttransaction", transaction)
        if not result.get("result"):
            code = result.get("code", "UNKNOWN")
            message = decode_node_message(result.get("message", ""))
            raise TronError(f"Broadcast rejected ({code}): {message}")
        return result.get("txid", transaction["txID"])

    def wait_for_receipt(
        self,
        txid: str,
        timeout: float = 60,
        poll_interval: float = 3.0,
    ) -> dict[str, Any]:
        """
        Poll for transaction info until the transaction is mined.

        Raises:
            TimeoutError: If not confirmed within timeout
        """
        start = time.time()
        while time.time() - start < timeout:
            info = self.post("/wallet/gettransactioninfobyid", {"value": txid})
            if info:
                return info
            time.sleep(poll_interval)

        raise TimeoutError(f"Transaction {txid} not confirmed within {timeout}s")


def get_tron_client(
    network: str,
    env: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> TronClient:
    """
    Build a signing client for a network.

    Args:
        network: Network identifier ("tron", "shasta", "nile", ...)
        env: Environment mapping (default: os.environ)
        transport: httpx transport override

    Returns:
        TronClient configured with the resolved host and signing key

    Raises:
        ConfigError: If PRIVATE_KEY is absent or empty
    """
    env = os.environ if env is None else env
    private_key = load_private_key(env)
    return TronClient(
        host=resolve_host(network),
        private_key=private_key,
        api_key=env.get("TRON_PRO_API") or None,
        transport=transport,
    )
