"""Libravatar CLI -- fetch an avatar for an email address.

Thin wrapper around ``resolve_avatar_sync`` using click.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from libravatar_client.protocol.types import Found, placeholder_from_setting
from libravatar_client.sdk.client import resolve_avatar_sync
from libravatar_client.sdk.config import AvatarConfig


def _error(msg: str) -> None:
    """Print an error message to stderr and exit 1."""
    click.echo(msg, err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(package_name="libravatar-client")
@click.option("--verbose", "-v", is_flag=True, help="Log discovery and fetch steps.")
def cli(verbose: bool) -> None:
    """Libravatar -- federated avatar lookup."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command()
@click.argument("email")
@click.option("--size", "-s", default=80, show_default=True, type=click.IntRange(min=1), help="Edge length in pixels.")
@click.option(
    "--output",
    "-o",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to write the image into.",
)
@click.option("--doh-server", default=None, help="DNS-over-HTTPS endpoint enabling instance discovery.")
@click.option("--preferred-instance", default=None, help="Instance to fall back to.")
@click.option("--default-avatar", default=None, help="Placeholder directive (e.g. retro, 404).")
@click.option("--no-default-avatar", is_flag=True, help="Send no placeholder directive at all.")
def fetch(
    email: str,
    size: int,
    output: Path,
    doh_server: str | None,
    preferred_instance: str | None,
    default_avatar: str | None,
    no_default_avatar: bool,
) -> None:
    """Fetch and save the avatar for EMAIL."""
    if no_default_avatar and default_avatar is not None:
        _error("--default-avatar and --no-default-avatar are mutually exclusive")

    placeholder = None
    if no_default_avatar:
        placeholder = placeholder_from_setting("")
    elif default_avatar:
        placeholder = placeholder_from_setting(default_avatar)

    config = AvatarConfig(
        doh_server=doh_server,
        preferred_instance=preferred_instance,
        default_avatar=placeholder,
    )

    result = resolve_avatar_sync(email, size, config=config)
    if not isinstance(result, Found):
        _error("No avatar found")
        return

    output.mkdir(parents=True, exist_ok=True)
    path = output / result.avatar.filename
    path.write_bytes(result.avatar.data)
    click.echo(str(path))

