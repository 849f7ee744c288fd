"""
JustPush CLI

Command-line interface for the JustPushV1 notification contract on TRON.

Commands:
  create-group       - Create a notification group and read it back
  send-notification  - Send a direct notification to a receiver
  read               - Read a group from contract state
  whoami             - Show the signer's TRON address
  info               - Show network and configuration status
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from .errors import ConfigError
from .pneuma.client import DEFAULT_NETWORK, resolve_host, resolve_network_id
from .sigil.tron import get_address, load_private_key


# ============ Constants ============

VERSION = "1.0.0"


# ============ Banner ============


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="red")
        + click.style("J U S T P U S H", fg="bright_white", bold=True)
        + click.style(f"  v{VERSION}", dim=True)
    )
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="justpush")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """JustPush — on-chain notifications for TRON."""
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Contract Commands ============

from .theurgy.create_group import create_group
from .theurgy.notify import send_notification
from .theurgy.read import read

cli.add_command(create_group)
cli.add_command(send_notification)
cli.add_command(read)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show the signer's TRON address."""
    try:
        address = get_address(load_private_key())
    except ValueError as exc:
        click.echo(f"No signing key found: {exc}")
        click.echo("Set PRIVATE_KEY in the environment or in .env.")
        sys.exit(1)
    click.echo(f"Address: {address}")


# ============ Info ============


@cli.command()
@click.option("--network", envvar="JUSTPUSH_NETWORK", default=DEFAULT_NETWORK, show_default=True)
def info(network: str) -> None:
    """Show network and configuration status."""
    _print_banner()

    click.secho("  Network ────────────────────────────────", fg="red")
    click.echo()
    click.echo(click.style("  Name:        ", dim=True) + network)
    click.echo(click.style("  Host:        ", dim=True) + resolve_host(network))
    try:
        network_id = resolve_network_id(network)
    except ConfigError:
        network_id = click.style("unknown", fg="yellow")
    click.echo(click.style("  Network ID:  ", dim=True) + network_id)
    click.echo()

    click.secho("  Signer ─────────────────────────────────", fg="red")
    click.echo()
    try:
        address = click.style(get_address(load_private_key()), fg="bright_white")
    except ValueError:
        address = click.style("not configured", fg="yellow") + click.style(
            "  (set PRIVATE_KEY)", dim=True
        )
    click.echo(click.style("  Address:     ", dim=True) + address)

    api_key = "configured" if os.environ.get("TRON_PRO_API") else "not set"
    click.echo(click.style("  API key:     ", dim=True) + api_key)
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """JustPush CLI entry point."""
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    load_dotenv(Path.cwd() / ".env")
    cli()


if __name__ == "__main__":
    main()
