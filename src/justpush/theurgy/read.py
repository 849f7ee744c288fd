"""
Theurgy Read - Query a group record from contract state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..pneuma import push
from .common import echo_record, network_options, open_contract, run_script


@click.command()
@network_options
@click.option("--group-id", required=True, help="Group id to look up")
def read(
    network: str,
    network_id: Optional[str],
    build_dir: Optional[Path],
    group_id: str,
) -> None:
    """Read a group from the JustPush contract."""

    def main() -> None:
        _, contract = open_contract(network, network_id, build_dir)
        group = push.get_group(contract, group_id)
        if group is None:
            click.secho(f"Group not found: {group_id}", fg="yellow")
            return
        echo_record(group)

    run_script(main)
