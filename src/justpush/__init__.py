__all__ = [
    # Client factory
    "TronClient",
    "get_tron_client",
    "resolve_host",
    "resolve_network_id",
    # Contracts
    "Contract",
    "ContractArtifact",
    "ContractRevertError",
    "load_artifact",
    # JustPushV1 operations
    "create_group",
    "get_group",
    "send_notification",
    # Errors
    "JustPushError",
    "ConfigError",
    "TronError",
    "TransactionFailedError",
    # Keys
    "get_address",
    "load_private_key",
]

from .errors import ConfigError, JustPushError, TransactionFailedError, TronError
from .pneuma.abi import ContractArtifact, load_artifact
from .pneuma.client import TronClient, get_tron_client, resolve_host, resolve_network_id
from .pneuma.contract import Contract, ContractRevertError
from .pneuma.push import create_group, get_group, send_notification
from .sigil.tron import get_address, load_private_key
