"""
Theurgy Create Group - Register a notification group.

Flow:
1. Build the client for the selected network
2. Send createGroup(groupId, owner, data) with the signer as owner
3. Read the group back with getGroup and print it
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional

import click

from ..pneuma import push
from .common import echo_record, network_options, open_contract, run_script


@click.command("create-group")
@network_options
@click.option("--group-id", default=None, help="Group id (default: random UUID4)")
@click.option("--name", default="JustPush 2", show_default=True, help="Group name")
@click.option("--description", default="JustPush 2", show_default=True, help="Group description")
def create_group(
    network: str,
    network_id: Optional[str],
    build_dir: Optional[Path],
    group_id: Optional[str],
    name: str,
    description: str,
) -> None:
    """
    Create a notification group owned by your address.

    The group metadata is stored on-chain as a JSON string with the
    name and description.
    """

    def main() -> None:
        client, contract = open_contract(network, network_id, build_dir)
        gid = group_id or str(uuid.uuid4())
        owner = client.address
        data = push.group_metadata(name, description)

        click.echo(f"  Contract: {contract.address}")
        click.echo(f"  Group ID: {gid}")
        click.echo(f"  Owner:    {owner}")
        click.echo("")

        push.create_group(contract, gid, owner, data)
        click.secho("Group created", fg="green")

        group = push.get_group(contract, gid)
        if group is None:
            click.secho(f"Group not readable yet: {gid}", fg="yellow")
            return
        echo_record(group)

    run_script(main)
