"""
Topics command for gitsim.
"""

import click

from gitsim.config import load_config
from gitsim.output import emit, emit_error
from gitsim.topics import search_topics, get_topic, list_categories, DEFAULT_THRESHOLD
from gitsim import render


@click.command("topics")
@click.argument("query", required=False, default="")
@click.option("-c", "--category", type=click.Choice(list_categories(), case_sensitive=False),
              help="Only show topics in this category")
@click.option("--threshold", type=click.IntRange(0, 100), default=None,
              help="Minimum fuzzy match score (0-100)")
@click.option("--pretty", is_flag=True, help="Display as a table instead of JSONL")
@click.pass_context
def topics_handler(ctx, query, category, threshold, pretty):
    """Browse and search the git topic catalog.

    Without QUERY, lists every topic. QUERY may be a topic id
    ("cherry-pick") or free text matched fuzzily ("undo commit").

    \b
    Examples:
        gitsim topics
        gitsim topics --category Branching --pretty
        gitsim topics rebase --pretty
        gitsim topics "temporarily save"
    """
    if threshold is None:
        config = (ctx.obj or {}).get('config') or load_config()
        threshold = config.get('topics', {}).get('fuzzy_threshold', DEFAULT_THRESHOLD)

    exact = get_topic(query) if query else None
    if exact and (not category or exact.category.lower() == category.lower()):
        if pretty:
            render.render_topic(exact)
        else:
            emit([exact])
        return

    results = search_topics(query, category=category, threshold=threshold)
    if pretty:
        render.render_topics(results)
        return
    if not results:
        emit_error(f"No topics match '{query}'", type="not_found",
                   context={'query': query, 'category': category, 'threshold': threshold})
    emit(results)
