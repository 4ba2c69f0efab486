"""
Main shell implementation for gitsim.

Provides an interactive terminal where every line is fed to a
RepositorySession, plus a few shell-only verbs that show the
presentation views (graph, panel, history, topics).
"""

import cmd
import sys
from typing import Optional, Dict, Any

from ..config import load_config
from ..services import RepositorySession
from .. import render
from .. import views
from ..topics import search_topics, get_topic, DEFAULT_THRESHOLD


class GitSimShell(cmd.Cmd):
    """Interactive terminal for the git simulator."""

    intro = """
╔═══════════════════════════════════════════════════════════════════╗
║                     gitsim Interactive Terminal                   ║
║                                                                   ║
║  Practice git without touching a real repository.                 ║
║                                                                   ║
║  Git:    git init, add, commit, checkout, branch, merge,          ║
║          status, log, reset --hard HEAD~1                         ║
║  Files:  touch <file>, echo "text" > <file>                       ║
║  Views:  graph, panel, history, topics [query]                    ║
║  Type 'help' for the command list, 'clear' to start over,         ║
║  'exit' or Ctrl+D to quit                                         ║
╚═══════════════════════════════════════════════════════════════════╝
"""

    def __init__(self, session: Optional[RepositorySession] = None, config: Optional[Dict[str, Any]] = None):
        """Attach to ``session`` (a fresh one by default) and set the prompt."""
        super().__init__()
        self.config = config if config is not None else load_config()
        self.session = session or RepositorySession()
        self.update_prompt()

    def update_prompt(self):
        """Update the shell prompt based on repository state."""
        self.prompt = views.prompt_from_config(self.session.snapshot, self.config)

    def run_line(self, line: str):
        """Send one line to the simulator and print its output."""
        result = self.session.run(line)
        render.render_result(result)
        return result

    def default(self, line):
        """Every non shell verb goes to the simulator."""
        self.run_line(line)

    def postcmd(self, stop, line):
        self.update_prompt()
        return stop

    def emptyline(self):
        """Blank input does nothing (cmd.Cmd would repeat the last line)."""

    def do_help(self, arg):
        """Show the simulator's command list."""
        self.run_line(f"help {arg}".strip())
        print()
        print("Shell views: graph, panel, history, topics [query], exit")

    def do_graph(self, arg):
        """Show the commit graph.

        Usage: graph
        """
        render.render_graph(views.build_graph(self.session.snapshot))

    def do_panel(self, arg):
        """Show the repository status panel.

        Usage: panel
        """
        display = self.config.get('display', {})
        render.render_status_panel(
            views.build_status_panel(self.session.snapshot, recent=display.get('recent_commits', 3))
        )

    def do_history(self, arg):
        """Show recent commands.

        Usage: history [N]
        """
        display = self.config.get('display', {})
        limit = display.get('history_limit', 10)
        if arg.strip():
            try:
                limit = int(arg.strip())
            except ValueError:
                print("Usage: history [N]")
                return
        render.render_history(views.build_history_panel(
            self.session.snapshot,
            limit=limit,
            preview_chars=display.get('output_preview_chars', 100),
        ))

    def do_topics(self, arg):
        """Browse the git topic catalog.

        Usage: topics [query]

        Examples:
            topics              # All topics
            topics rebase       # Show the rebase card
            topics undo         # Fuzzy search
        """
        query = arg.strip()
        topic = get_topic(query) if query else None
        if topic:
            render.render_topic(topic)
            return
        threshold = self.config.get('topics', {}).get('fuzzy_threshold', DEFAULT_THRESHOLD)
        render.render_topics(search_topics(query, threshold=threshold))

    def do_exit(self, arg):
        """Leave the terminal. The simulated repository is discarded."""
        print("\nGoodbye!")
        return True

    do_quit = do_exit

    def do_EOF(self, arg):
        """Ctrl+D leaves the terminal."""
        print()
        return self.do_exit(arg)


def run_shell(config: Optional[Dict[str, Any]] = None):
    """Start a terminal on a fresh repository and block until the user leaves."""
    shell = GitSimShell(config=config)
    try:
        shell.cmdloop()
    except KeyboardInterrupt:
        print("\n\nInterrupted. Goodbye!")
        sys.exit(0)
