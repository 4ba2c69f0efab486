"""
Rendering functions for gitsim output.

This module handles all pretty-printing for the terminal.
The views module builds the data, this module makes it human-readable.
Command output is always printed as plain Text so that git's square
brackets (e.g. "[main abc1234]") are never read as Rich markup.
"""

from rich.table import Table
from rich.console import Console
from rich.text import Text
from rich import box
from typing import List

from .services.interpreter import CommandResult
from .views import CommitGraph, StatusPanel, HistoryPanel
from .topics import Topic

console = Console()


def render_result(result: CommandResult) -> None:
    """Print a command's output, red when it failed."""
    if not result.output:
        return
    console.print(Text(result.output, style="red" if result.error else ""))


def render_transcript_line(prompt: str, command: str, result: CommandResult) -> None:
    """Print ``prompt command`` followed by the command's output."""
    line = Text(prompt, style="green")
    line.append(command, style="bold")
    console.print(line)
    render_result(result)


def render_status_panel(panel: StatusPanel) -> None:
    """
    Render the repository status panel.

    Args:
        panel: Status view model from views.build_status_panel
    """
    if not panel.initialized:
        console.print("[yellow]No Git repository. Run 'git init' to get started.[/yellow]")
        return

    if panel.detached_head:
        console.print(Text(f"Detached HEAD at commit: {panel.head}", style="bold red"))
    else:
        console.print(Text(f"On branch: {panel.current_branch}", style="bold green"))
    console.print(f"Commits: {panel.commit_count}")

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("Area")
    table.add_column("File")
    table.add_column("Status")
    for entry in panel.staged:
        table.add_row("staged", entry.name, Text(entry.status.value, style=_file_style(entry.status.value)))
    for entry in panel.working_dir:
        table.add_row("working", entry.name, Text(entry.status.value, style=_file_style(entry.status.value)))
    if table.row_count:
        console.print(table)

    branches = Table(title="Branches", box=box.SIMPLE, show_header=False)
    branches.add_column("Marker")
    branches.add_column("Name")
    branches.add_column("Commit", style="dim")
    for row in panel.branches:
        branches.add_row(
            Text("*" if row.current else " ", style="green"),
            Text(row.name, style=f"bold {row.color}" if row.current else row.color),
            row.commit,
        )
    console.print(branches)

    if panel.recent_commits:
        console.print("[bold]Recent commits:[/bold]")
        for commit in panel.recent_commits:
            line = Text(f"  {commit.short_id} ", style="yellow")
            line.append(commit.message)
            if commit.is_merge:
                line.append(" MERGE", style="bold magenta")
            line.append(f"  {commit.timestamp.strftime('%H:%M:%S')}", style="dim")
            console.print(line)

    if panel.clean:
        console.print("[green]Nothing to commit, working directory clean[/green]")


def _file_style(status: str) -> str:
    return {
        'added': 'green',
        'modified': 'yellow',
        'deleted': 'red',
    }.get(status, 'dim')


def render_history(panel: HistoryPanel) -> None:
    """Render the command history panel."""
    if not panel.rows:
        console.print("[yellow]No commands yet.[/yellow]")
        return

    table = Table(title="Command History", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("", width=1)
    table.add_column("Command", style="cyan")
    table.add_column("Output")
    table.add_column("Time", style="dim")

    for row in panel.rows:
        table.add_row(
            Text("✗", style="red") if row.error else Text("✓", style="green"),
            Text(row.command),
            Text(row.output, style="red" if row.error else ""),
            row.timestamp.strftime('%H:%M:%S'),
        )
    console.print(table)

    if panel.truncated:
        console.print(f"[dim]Showing last {len(panel.rows)} commands of {panel.total} total[/dim]")


def render_graph(graph: CommitGraph) -> None:
    """
    Render the commit graph, newest commit first.

    Each commit sits in its branch's lane; merge commits are drawn as a
    diamond and HEAD is marked.
    """
    if graph.empty:
        console.print("[yellow]No commits yet. Create your first commit to see the graph.[/yellow]")
        return

    lane_count = max(len(graph.lanes), 1)
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold magenta")
    table.add_column("Graph")
    table.add_column("Commit", style="yellow")
    table.add_column("Message")
    table.add_column("Refs")

    for node in reversed(graph.nodes):
        glyphs = Text()
        for lane in range(lane_count):
            if lane == node.lane:
                glyphs.append("◆ " if node.is_merge else "● ", style=f"bold {node.color}")
            else:
                glyphs.append("│ ", style="dim")

        refs = Text()
        if node.is_head:
            refs.append("HEAD", style="bold cyan")
            if node.labels and not graph.detached_head:
                refs.append(" -> ", style="cyan")
        for i, label in enumerate(node.labels):
            if i:
                refs.append(", ")
            refs.append(label, style=dict(graph.lanes).get(label, ""))

        table.add_row(glyphs, node.short_id, Text(node.message), refs)

    console.print(table)
    if graph.detached_head:
        console.print("[red]Detached HEAD[/red]")


def render_topics(topics: List[Topic]) -> None:
    """Render topics as a table."""
    if not topics:
        console.print("[yellow]No matching topics.[/yellow]")
        return

    table = Table(title="Git Topics", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("Command", style="cyan")
    table.add_column("Category", style="blue")
    table.add_column("Description")
    table.add_column("Try it", justify="center")

    for topic in topics:
        table.add_row(
            topic.name,
            topic.category,
            topic.description,
            Text("✓", style="green") if topic.simulated else Text("-", style="dim"),
        )
    console.print(table)


def render_topic(topic: Topic) -> None:
    """Render one topic card in full."""
    console.print(Text(topic.name, style="bold cyan"), Text(f"({topic.category})", style="blue"))
    console.print(topic.description)
    console.print("\n[bold]Examples:[/bold]")
    for example in topic.examples:
        console.print(Text(f"  $ {example}", style="green"))
    console.print("\n[bold]Use cases:[/bold]")
    for use_case in topic.use_cases:
        console.print(f"  - {use_case}")
    if topic.related_commands:
        console.print(Text(f"\nRelated: {', '.join(topic.related_commands)}", style="dim"))
    if not topic.simulated:
        console.print("[dim]Reference only: not available in the simulator.[/dim]")
