"""
Theurgy Notify - Send a direct notification to one receiver.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..pneuma import push
from .common import network_options, open_contract, run_script


@click.command("send-notification")
@network_options
@click.option(
    "--group-id",
    default="cb5edeb6-a8a1-466a-aa6c-0d01d88fa68e",
    show_default=True,
    help="Sending group id",
)
@click.option(
    "--receiver",
    default="TBtNuDxgnwpVQKxAdmXeCdBm6LRiyCUYu1",
    show_default=True,
    help="Receiver address (base58)",
)
@click.option("--title", default="You are about to liquidate", help="Notification title")
@click.option("--content", default="You just swapped some stuff", help="Notification body")
def send_notification(
    network: str,
    network_id: Optional[str],
    build_dir: Optional[Path],
    group_id: str,
    receiver: str,
    title: str,
    content: str,
) -> None:
    """Send a notification from a group to a receiver."""

    def main() -> None:
        _, contract = open_contract(network, network_id, build_dir)

        click.echo(f"  Group:    {group_id}")
        click.echo(f"  Receiver: {receiver}")
        click.echo(f"  Title:    {title}")
        click.echo("")

        result = push.send_notification(contract, group_id, receiver, title, content)
        click.secho("Notification sent", fg="green")
        click.echo(f"  TX: {result['txid']}")

    run_script(main)
