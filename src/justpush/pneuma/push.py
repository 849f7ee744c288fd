"""JustPushV1 contract operations."""

from __future__ import annotations

import json
from typing import Any, Optional

from ..sigil.tron import to_base58_address
from .contract import Contract, ContractRevertError

ZERO_ADDRESS = to_base58_address("41" + "00" * 20)


def group_metadata(name: str, description: str) -> str:
    return json.dumps(
        {"name": name, "description": description},
        separators=(",", ":"),
        ensure_ascii=False,
    )


def create_group(contract: Contract, group_id: str, owner: str, data: str, **kwargs: Any) -> dict[str, Any]:
    return contract.send("createGroup", [group_id, owner, data], **kwargs)


def _is_empty(value: Any) -> bool:
    if isinstance(value, dict):
        return all(_is_empty(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return all(_is_empty(v) for v in value)
    if isinstance(value, str) and value.startswith("T"):
        # Unset address fields decode to the zero address.
        return value == ZERO_ADDRESS
    return not value


def get_group(contract: Contract, group_id: str) -> Optional[Any]:
    """
    Read a group record.

    Returns None when the contract reverts for the id or returns an
    empty record.
    """
    try:
        group = contract.call("getGroup", [group_id])
    except ContractRevertError:
        return None
    if group is None or _is_empty(group):
        return None
    return group


def send_notification(
    contract: Contract,
    group_id: str,
    receiver: str,
    title: str,
    content: str,
    **kwargs: Any,
) -> dict[str, Any]:
    return contract.send("sendNotification", [group_id, receiver, title, content], **kwargs)
