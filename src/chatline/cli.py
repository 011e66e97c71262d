"""CLI entry point for chatline. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click

from chatline.chat import ChatInput
from chatline.config import ChatOptions, load_options
from chatline.keys import key_from_name
from chatline.search import SoundIndex
from chatline.terminal import TerminalHost

DEFAULT_OPEN_KEY = "T"
DEFAULT_SEND_KEY = "Enter"


def _resolve_key(name: str | None, configured: str | None, default: str) -> str:
    if name is None:
        return configured or key_from_name(default)
    key = key_from_name(name)
    if key is None:
        raise click.BadParameter(f"unknown key name {name!r}")
    return key


def _configure_logging(log_file: str | None, verbose: bool) -> None:
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if log_file is None:
        # Log lines would corrupt the raw-mode display.
        logging.disable(logging.CRITICAL)


@click.command()
@click.option(
    "--sounds",
    "sounds_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="File with one sound name per line",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding options.json",
)
@click.option("--open-key", default=None, help="Key name that opens chat (e.g. T)")
@click.option("--send-key", default=None, help="Key name that sends chat (e.g. Enter)")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write logs here")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages")
def main(sounds_path, config_dir, open_key, send_key, log_file, verbose):
    """Type chat with sound-name autocomplete. Tab cycles hints."""
    _configure_logging(log_file, verbose)

    configured = load_options(config_dir)
    options = ChatOptions(
        open_chat_key=_resolve_key(open_key, configured.open_chat_key, DEFAULT_OPEN_KEY),
        send_chat_key=_resolve_key(send_key, configured.send_chat_key, DEFAULT_SEND_KEY),
    )

    index = SoundIndex.from_file(sounds_path)
    click.echo(f"Loaded {len(index)} sounds")

    async def _run() -> None:
        host = TerminalHost()
        await host.run(ChatInput(options, index.search, host))

    asyncio.run(_run())
