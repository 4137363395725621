"""CLI entry point for pi-readline: an echo loop over the line editor."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from pi.readline.config import ReadlineConfig, load_config
from pi.readline.errors import ReadlineError
from pi.readline.readline import InterruptEvent, Readline
from pi.readline.terminal import StdinReader, raw_mode

logger = logging.getLogger(__name__)


async def echo_loop(config: ReadlineConfig) -> None:
    """Print every submitted line to stdout until Ctrl-C."""
    reader = StdinReader()
    reader.start()
    try:
        with Readline.from_config(reader, config) as rl:
            while True:
                event = await rl.run()
                if isinstance(event, InterruptEvent):
                    sys.stderr.write("\r\n")
                    return
                # Raw mode disables output post-processing, so end lines with \r\n
                sys.stdout.write(event.text + "\r\n")
                sys.stdout.flush()
    finally:
        reader.close()


@click.command()
@click.option("--prompt", default=None, help="Prompt to show (default: $PI_READLINE_PROMPT or '> ')")
@click.option(
    "--history",
    "history_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="History file (default: $PI_READLINE_HISTORY)",
)
@click.option("--no-history", is_flag=True, help="Do not read or write a history file")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write logs here")
def main(prompt, history_path, no_history, log_level, log_file):
    """Read lines interactively and echo them to stdout."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=log_file,
    )

    config = load_config()
    if prompt is not None:
        config.prompt = prompt
    if history_path is not None:
        config.history_file = Path(history_path)
    if no_history:
        config.history_file = None

    if not sys.stdin.isatty():
        click.echo("Error: stdin is not a terminal", err=True)
        sys.exit(1)

    try:
        with raw_mode():
            asyncio.run(echo_loop(config))
    except ReadlineError as e:
        logger.debug("Read loop failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
