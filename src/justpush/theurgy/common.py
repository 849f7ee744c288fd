"""Shared plumbing for the contract commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click

from ..errors import JustPushError
from ..pneuma.abi import CONTRACT_NAME, load_artifact
from ..pneuma.client import DEFAULT_NETWORK, TronClient, get_tron_client, resolve_network_id
from ..pneuma.contract import Contract


def network_options(func: Callable) -> Callable:
    """Attach --network / --network-id / --build-dir to a command."""
    func = click.option(
        "--build-dir",
        envvar="JUSTPUSH_BUILD_DIR",
        default=None,
        type=click.Path(file_okay=False, path_type=Path),
        help="Directory holding <Contract>.json artifacts",
    )(func)
    func = click.option(
        "--network-id",
        envvar="JUSTPUSH_NETWORK_ID",
        default=None,
        help="Artifact network id (default: derived from --network)",
    )(func)
    func = click.option(
        "--network",
        envvar="JUSTPUSH_NETWORK",
        default=DEFAULT_NETWORK,
        show_default=True,
        help="Network name (tron, shasta, nile)",
    )(func)
    return func


def open_contract(
    network: str,
    network_id: Optional[str] = None,
    build_dir: Optional[Path] = None,
) -> tuple[TronClient, Contract]:
    """Build the client and bind the JustPushV1 deployment for a network."""
    client = get_tron_client(network)
    artifact = load_artifact(CONTRACT_NAME, build_dir=build_dir)
    contract = Contract.for_network(
        client, artifact, network_id or resolve_network_id(network)
    )
    return client, contract


def echo_record(record: Any) -> None:
    if isinstance(record, (dict, list, tuple)):
        click.echo(json.dumps(record, indent=2, default=str))
    else:
        click.echo(record)


def run_script(body: Callable[[], None]) -> None:
    """
    Run a command body, report any failure, and always finish with "Done!".

    Exits non-zero after "Done!" when the body raised.
    """
    exit_code = 0
    try:
        body()
    except JustPushError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        exit_code = exc.exit_code
    except Exception as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        exit_code = 1

    click.echo("Done!")
    if exit_code:
        sys.exit(exit_code)
