"""
Shared fixtures: an in-memory TRON node served through httpx.MockTransport.

The fake node understands the handful of /wallet endpoints the client
uses and keeps JustPushV1 groups in a dict, so commands can be exercised
end-to-end without network access.
"""

from __future__ import annotations

import json
import secrets
from pathlib import Path
from typing import Any

import httpx
import pytest
from eth_abi import decode, encode
from eth_keys import keys

from justpush.pneuma.abi import ContractArtifact, load_artifact
from justpush.pneuma.client import TronClient, get_tron_client
from justpush.pneuma.contract import Contract
from justpush.sigil.tron import get_address, to_base58_address, to_evm_address

TEST_PRIVATE_KEY = "0x" + "4c" * 32
CONTRACT_ADDRESS = to_base58_address("41" + "ab" * 20)

JUSTPUSH_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "createGroup",
        "inputs": [
            {"name": "groupId", "type": "string"},
            {"name": "owner", "type": "address"},
            {"name": "data", "type": "string"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "getGroup",
        "inputs": [{"name": "groupId", "type": "string"}],
        "outputs": [
            {
                "name": "",
                "type": "tuple",
                "components": [
                    {"name": "id", "type": "string"},
                    {"name": "owner", "type": "address"},
                    {"name": "data", "type": "string"},
                ],
            }
        ],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "sendNotification",
        "inputs": [
            {"name": "groupId", "type": "string"},
            {"name": "receiver", "type": "address"},
            {"name": "title", "type": "string"},
            {"name": "content", "type": "string"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
]


def _revert_data(reason: str) -> str:
    return "08c379a0" + encode(["string"], [reason]).hex()


def _split_selector(selector: str) -> tuple[str, list[str]]:
    name, _, rest = selector.partition("(")
    types = rest.rstrip(")")
    return name, types.split(",") if types else []


class FakeTronNode:
    """Minimal stand-in for a TRON full node's HTTP API."""

    def __init__(self) -> None:
        self.groups: dict[str, tuple[str, str, str]] = {}
        self.notifications: list[dict[str, str]] = []
        self.pending: dict[str, tuple[str, list[Any], str]] = {}
        self.receipts: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_next_transaction = False
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content or b"{}")
        routes = {
            "/wallet/triggersmartcontract": self._trigger,
            "/wallet/triggerconstantcontract": self._constant,
            "/wallet/broadcasttransaction": self._broadcast,
            "/wallet/gettransactioninfobyid": self._info,
        }
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"Error": "not found"})
        return httpx.Response(200, json=route(body))

    def _decode_call(self, body: dict[str, Any]) -> tuple[str, list[Any]]:
        name, types = _split_selector(body["function_selector"])
        args = list(decode(types, bytes.fromhex(body["parameter"]))) if types else []
        args = [
            to_base58_address(a) if t == "address" else a for t, a in zip(types, args)
        ]
        return name, args

    def _trigger(self, body: dict[str, Any]) -> dict[str, Any]:
        name, args = self._decode_call(body)
        txid = secrets.token_hex(32)
        self.pending[txid] = (name, args, body["owner_address"])
        return {
            "result": {"result": True},
            "transaction": {
                "txID": txid,
                "raw_data": {"fee_limit": body.get("fee_limit")},
                "raw_data_hex": "0a02",
                "visible": False,
            },
        }

    def _constant(self, body: dict[str, Any]) -> dict[str, Any]:
        name, args = self._decode_call(body)
        if name != "getGroup":
            return {"result": {"code": "OTHER_ERROR", "message": b"unknown".hex()}}
        group = self.groups.get(args[0])
        if group is None:
            return {
                "result": {"result": True},
                "constant_result": [_revert_data("Group not found")],
                "transaction": {"ret": [{"ret": "FAILED"}]},
            }
        group_id, owner, data = group
        encoded = encode(["(string,address,string)"], [(group_id, to_evm_address(owner), data)])
        return {"result": {"result": True}, "constant_result": [encoded.hex()]}

    def _broadcast(self, body: dict[str, Any]) -> dict[str, Any]:
        txid = body["txID"]
        name, args, owner_hex = self.pending.pop(txid)

        signature = keys.Signature(bytes.fromhex(body["signature"][0]))
        signer = signature.recover_public_key_from_msg_hash(bytes.fromhex(txid))
        if to_base58_address(signer.to_checksum_address()) != to_base58_address(owner_hex):
            return {"code": "SIGERROR", "message": b"Validate signature error".hex()}

        if self.fail_next_transaction:
            self.fail_next_transaction = False
            self.receipts[txid] = {
                "id": txid,
                "blockNumber": 1,
                "result": "FAILED",
                "resMessage": b"REVERT opcode executed".hex(),
                "receipt": {"result": "REVERT"},
            }
            return {"result": True, "txid": txid}

        if name == "createGroup":
            self.groups[args[0]] = (args[0], args[1], args[2])
        elif name == "sendNotification":
            group_id, receiver, title, content = args
            self.notifications.append(
                {"group_id": group_id, "receiver": receiver, "title": title, "content": content}
            )
        self.receipts[txid] = {"id": txid, "blockNumber": 1, "receipt": {"result": "SUCCESS"}}
        return {"result": True, "txid": txid}

    def _info(self, body: dict[str, Any]) -> dict[str, Any]:
        return self.receipts.get(body["value"], {})


@pytest.fixture()
def node() -> FakeTronNode:
    return FakeTronNode()


@pytest.fixture()
def signer_address() -> str:
    return get_address(TEST_PRIVATE_KEY)


@pytest.fixture()
def artifact_dir(tmp_path: Path) -> Path:
    """Write a JustPushV1 build artifact deployed on network id 3 (nile)."""
    build_dir = tmp_path / "build" / "contracts"
    build_dir.mkdir(parents=True)
    artifact = {
        "contractName": "JustPushV1",
        "abi": JUSTPUSH_ABI,
        "networks": {"3": {"address": CONTRACT_ADDRESS}},
    }
    (build_dir / "JustPushV1.json").write_text(json.dumps(artifact), encoding="utf-8")
    return build_dir


@pytest.fixture()
def artifact(artifact_dir: Path) -> ContractArtifact:
    return load_artifact("JustPushV1", build_dir=artifact_dir)


@pytest.fixture()
def client(node: FakeTronNode) -> TronClient:
    return get_tron_client("nile", env={"PRIVATE_KEY": TEST_PRIVATE_KEY}, transport=node.transport)


@pytest.fixture()
def contract(client: TronClient, artifact: ContractArtifact) -> Contract:
    return Contract.for_network(client, artifact, "3")


@pytest.fixture()
def private_key() -> str:
    return TEST_PRIVATE_KEY
