"""
Shell command for gitsim.
"""

import click
import sys


@click.command()
@click.pass_context
def shell_handler(ctx):
    """Launch the interactive git terminal.

    Every line is executed by the simulator, exactly as if it were typed
    into a terminal inside a fresh repository:

    \b
    Simulated commands:
      git init | add | commit | checkout | branch | merge
      git status | log | reset --hard HEAD~1
      touch <file>, echo "text" > <file>, clear, help

    \b
    Shell views:
      graph                - Commit graph
      panel                - Repository status panel
      history [N]          - Last N commands
      topics [query]       - Git topic catalog
      exit                 - Exit shell (or Ctrl+D)

    \b
    Examples:
        gitsim shell

        user@computer:~$ git init
        user@repo:(main)$ git add .
        user@repo:(main)$ git commit -m "first"
        user@repo:(main)$ graph
    """
    from gitsim.shell import run_shell

    config = (ctx.obj or {}).get('config')
    try:
        run_shell(config=config)
    except KeyboardInterrupt:
        click.echo("\nShell closed.")
    except Exception as e:
        click.echo(f"Error running shell: {e}", err=True)
        sys.exit(1)
