#!/usr/bin/env python3

import logging

import click

from gitsim.config import load_config, configure_logging
from gitsim.exit_codes import CommandError, exit_with_code, get_exit_code_for_exception
from gitsim.commands.shell import shell_handler
from gitsim.commands.run import run_handler
from gitsim.commands.topics import topics_handler
from gitsim.commands.config import config_cmd

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="gitsim")
@click.option("-v", "--verbose", is_flag=True, help="Log simulator transitions to stderr")
@click.pass_context
def cli(ctx, verbose):
    """gitsim - An in-memory git simulator for learning git.

    Type git commands into a simulated terminal, replay lesson scripts,
    and browse a catalog of git topics without touching a real repository.
    """
    config = load_config()
    configure_logging(config)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    ctx.ensure_object(dict)
    ctx.obj['config'] = config


cli.add_command(shell_handler, name='shell')
cli.add_command(run_handler)
cli.add_command(topics_handler)
cli.add_command(config_cmd)


def main():
    try:
        cli()
    except CommandError as e:
        logger.debug(f"Command failed with exit code {e.exit_code}")
        exit_with_code(get_exit_code_for_exception(e), f"Error: {e}")


if __name__ == "__main__":
    main()
