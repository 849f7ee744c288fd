"""
ABI Loader - Loads contract ABIs and deployed addresses from build artifacts.

Artifacts live in build/contracts/<Name>.json (TronBox compilation
output) and carry both the ABI and a ``networks`` mapping from network
id to deployed address.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from ..errors import ConfigError

CONTRACT_NAME = "JustPushV1"


@dataclass(frozen=True)
class ContractArtifact:
    name: str
    abi: list[dict[str, Any]]
    networks: dict[str, dict[str, Any]] = field(default_factory=dict)

    def address_for(self, network_id: str) -> str:
        """
        Return the deployed address for a network id.

        Raises:
            ConfigError: If the contract has no deployment on that network
        """
        deployment = self.networks.get(str(network_id))
        if not deployment or not deployment.get("address"):
            known = ", ".join(sorted(self.networks)) or "none"
            raise ConfigError(
                f"{self.name} is not deployed on network {network_id} "
                f"(known networks: {known})"
            )
        return deployment["address"]

    def function(self, name: str) -> dict[str, Any]:
        for entry in self.abi:
            if entry.get("type") == "function" and entry.get("name") == name:
                return entry
        raise ValueError(f"Function {name} not found in ABI")


def find_build_dir(start: Optional[Path] = None) -> Path:
    """
    Locate the build/contracts/ directory.

    JUSTPUSH_BUILD_DIR wins when set; otherwise searches from ``start``
    (default: the working directory) upward.
    """
    override = os.environ.get("JUSTPUSH_BUILD_DIR")
    if override:
        return Path(override).expanduser()

    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        candidate = parent / "build" / "contracts"
        if candidate.is_dir():
            return candidate
    raise ConfigError(
        "Cannot find build/contracts/. Run 'tronbox compile' or set JUSTPUSH_BUILD_DIR."
    )


def load_artifact_file(path: Path) -> ContractArtifact:
    if not path.exists():
        raise ConfigError(f"Artifact not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    if "abi" not in artifact:
        raise ConfigError(f"Artifact has no ABI: {path}")

    return ContractArtifact(
        name=artifact.get("contractName", path.stem),
        abi=artifact["abi"],
        networks={str(k): v for k, v in artifact.get("networks", {}).items()},
    )


@lru_cache(maxsize=16)
def _load_cached(path: Path) -> ContractArtifact:
    return load_artifact_file(path)


def load_artifact(contract_name: str = CONTRACT_NAME, build_dir: Optional[Path] = None) -> ContractArtifact:
    """
    Load a contract's build artifact.

    Args:
        contract_name: Contract name (e.g., "JustPushV1")
        build_dir: Artifact directory (default: located by find_build_dir)

    Returns:
        ContractArtifact with ABI and per-network addresses

    Raises:
        ConfigError: If the directory or artifact cannot be found
    """
    build_dir = build_dir or find_build_dir()
    return _load_cached((build_dir / f"{contract_name}.json").resolve())
