"""
Run command for gitsim.

Replays a sequence of terminal commands in a fresh simulated
repository and prints what a user would have seen.
"""

import json
import logging
from typing import List

import click

from gitsim.config import load_config
from gitsim.exit_codes import ScriptFailedError
from gitsim.output import emit
from gitsim.services import RepositorySession
from gitsim import render
from gitsim import views

logger = logging.getLogger(__name__)


def read_script(script) -> List[str]:
    """Non-blank, non-comment lines of a script file."""
    lines = []
    for raw in script:
        line = raw.strip()
        if line and not line.startswith('#'):
            lines.append(line)
    return lines


@click.command("run")
@click.argument("commands", nargs=-1)
@click.option("-f", "--file", "script", type=click.File("r"),
              help="Read commands from a file, one per line ('-' for stdin)")
@click.option("--json", "json_output", is_flag=True,
              help="Output the command log as JSONL instead of a transcript")
@click.option("--snapshot", is_flag=True,
              help="Output the final repository snapshot as JSON")
@click.option("--graph", is_flag=True, help="Show the commit graph after the last command")
@click.option("--strict", is_flag=True, help="Exit with status 64 if any command failed")
@click.pass_context
def run_handler(ctx, commands, script, json_output, snapshot, graph, strict):
    """Replay git commands in a fresh simulated repository.

    Each COMMANDS argument is one terminal line. Commands given with
    --file run after the arguments.

    \b
    Examples:
        gitsim run "git init" "git add ." "git commit -m first"
        gitsim run --file lesson1.txt --graph
        gitsim run --json "git init" "git status"
        gitsim run --strict -f lesson1.txt
    """
    lines = list(commands)
    if script is not None:
        lines.extend(read_script(script))
    if not lines:
        raise click.UsageError("No commands given. Pass commands as arguments or use --file.")

    config = (ctx.obj or {}).get('config') or load_config()
    quiet = json_output or snapshot

    session = RepositorySession()
    failed = 0
    for line in lines:
        prompt = views.prompt_from_config(session.snapshot, config)
        result = session.run(line)
        if result.error:
            failed += 1
        if not quiet:
            render.render_transcript_line(prompt, line, result)

    if json_output:
        emit(session.snapshot.command_history)
    if snapshot:
        click.echo(json.dumps(session.snapshot.to_dict(), indent=2, ensure_ascii=False))
    if graph:
        render.render_graph(views.build_graph(session.snapshot))

    logger.debug(f"Replayed {len(lines)} command(s), {failed} failed")
    if strict and failed:
        raise ScriptFailedError(f"{failed} of {len(lines)} command(s) failed", failed, len(lines))
