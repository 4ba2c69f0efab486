"""
Static git topic catalog for gitsim.

Reference cards for common git commands, grouped by category. Only
some of them can be executed by the simulator; the rest (clone, push,
rebase, stash, ...) are reading material.

Search uses fuzzy matching so that typos still find the right card:

    search_topics("merg")       # -> git merge first
    search_topics("undo")       # -> git reset
"""

from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Tuple
import logging

from rapidfuzz import fuzz

from .services.interpreter import GitSubcommand

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 60

SIMULATED_COMMANDS = frozenset(
    f"git {s.value}" for s in GitSubcommand if s.value is not None
)


@dataclass(frozen=True)
class Topic:
    """
    One reference card.

    Attributes:
        id: Stable identifier (e.g. "cherry-pick")
        name: Command as typed (e.g. "git cherry-pick")
        category: Basics, Branching or Advanced
        description: One sentence summary
        examples: Example invocations
        use_cases: When to reach for the command
        related_commands: Commands worth reading next
    """

    id: str
    name: str
    category: str
    description: str
    examples: Tuple[str, ...] = ()
    use_cases: Tuple[str, ...] = ()
    related_commands: Tuple[str, ...] = ()

    @property
    def simulated(self) -> bool:
        """True if the gitsim terminal can execute this command."""
        return self.name in SIMULATED_COMMANDS

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'description': self.description,
            'examples': list(self.examples),
            'use_cases': list(self.use_cases),
            'related_commands': list(self.related_commands),
            'simulated': self.simulated,
        }


TOPICS: Tuple[Topic, ...] = (
    Topic(
        id='init',
        name='git init',
        category='Basics',
        description='Initialize a new Git repository in the current directory.',
        examples=('git init', 'git init my-project'),
        use_cases=(
            'Starting a new project',
            'Converting an existing project to use Git',
            'Creating a new repository from scratch',
        ),
        related_commands=('git clone', 'git status'),
    ),
    Topic(
        id='clone',
        name='git clone',
        category='Basics',
        description='Create a local copy of a remote repository.',
        examples=(
            'git clone https://github.com/user/repo.git',
            'git clone git@github.com:user/repo.git',
            'git clone https://github.com/user/repo.git my-folder',
        ),
        use_cases=(
            'Getting a copy of an existing project',
            'Contributing to open source projects',
            'Backing up remote repositories locally',
        ),
        related_commands=('git init', 'git remote', 'git pull'),
    ),
    Topic(
        id='add',
        name='git add',
        category='Basics',
        description='Stage changes for the next commit.',
        examples=('git add file.txt', 'git add .', 'git add -A', 'git add *.js'),
        use_cases=(
            'Preparing changes for commit',
            'Staging specific files',
            'Adding all changes at once',
        ),
        related_commands=('git commit', 'git status', 'git reset'),
    ),
    Topic(
        id='commit',
        name='git commit',
        category='Basics',
        description='Save staged changes to the repository with a message.',
        examples=(
            'git commit -m "Add new feature"',
            'git commit -am "Fix bug and update docs"',
            'git commit --amend',
        ),
        use_cases=(
            'Saving changes with a descriptive message',
            'Creating checkpoints in development',
            'Modifying the last commit',
        ),
        related_commands=('git add', 'git push', 'git log'),
    ),
    Topic(
        id='status',
        name='git status',
        category='Basics',
        description='Show the current state of the working directory and staging area.',
        examples=('git status', 'git status -s', 'git status --porcelain'),
        use_cases=(
            'Checking what files have changed',
            "Seeing what's staged for commit",
            'Understanding the current repository state',
        ),
        related_commands=('git add', 'git commit', 'git diff'),
    ),
    Topic(
        id='log',
        name='git log',
        category='Basics',
        description='View commit history of the repository.',
        examples=('git log', 'git log --oneline', 'git log --graph --all', 'git log -p'),
        use_cases=(
            'Reviewing project history',
            'Finding specific commits',
            'Understanding code changes over time',
        ),
        related_commands=('git show', 'git diff', 'git blame'),
    ),
    Topic(
        id='branch',
        name='git branch',
        category='Branching',
        description='List, create, or delete branches.',
        examples=(
            'git branch',
            'git branch feature-branch',
            'git branch -d feature-branch',
            'git branch -r',
        ),
        use_cases=(
            'Creating new feature branches',
            'Listing all branches',
            'Deleting merged branches',
        ),
        related_commands=('git checkout', 'git merge', 'git switch'),
    ),
    Topic(
        id='checkout',
        name='git checkout',
        category='Branching',
        description='Switch branches or restore working tree files.',
        examples=(
            'git checkout main',
            'git checkout -b new-feature',
            'git checkout -- file.txt',
            'git checkout HEAD~1',
        ),
        use_cases=(
            'Switching between branches',
            'Creating and switching to new branches',
            'Restoring files to previous versions',
        ),
        related_commands=('git branch', 'git switch', 'git restore'),
    ),
    Topic(
        id='merge',
        name='git merge',
        category='Branching',
        description='Join two or more development histories together.',
        examples=(
            'git merge feature-branch',
            'git merge --no-ff feature-branch',
            'git merge --squash feature-branch',
        ),
        use_cases=(
            'Integrating feature branches',
            'Combining parallel development work',
            'Bringing changes from one branch to another',
        ),
        related_commands=('git branch', 'git checkout', 'git rebase'),
    ),
    Topic(
        id='pull',
        name='git pull',
        category='Branching',
        description='Fetch and merge changes from a remote repository.',
        examples=('git pull', 'git pull origin main', 'git pull --rebase'),
        use_cases=(
            'Getting latest changes from remote',
            'Synchronizing with team members',
            'Updating local branch with remote changes',
        ),
        related_commands=('git fetch', 'git merge', 'git push'),
    ),
    Topic(
        id='push',
        name='git push',
        category='Branching',
        description='Upload local commits to a remote repository.',
        examples=(
            'git push',
            'git push origin main',
            'git push -u origin feature-branch',
            'git push --force',
        ),
        use_cases=(
            'Sharing changes with team members',
            'Backing up work to remote repository',
            'Publishing new features',
        ),
        related_commands=('git pull', 'git fetch', 'git remote'),
    ),
    Topic(
        id='rebase',
        name='git rebase',
        category='Advanced',
        description='Reapply commits on top of another base tip.',
        examples=(
            'git rebase main',
            'git rebase -i HEAD~3',
            'git rebase --onto main feature~5 feature',
        ),
        use_cases=(
            'Creating a cleaner project history',
            'Squashing commits',
            'Moving branches to new base commits',
        ),
        related_commands=('git merge', 'git cherry-pick', 'git reset'),
    ),
    Topic(
        id='stash',
        name='git stash',
        category='Advanced',
        description='Temporarily store changes in a dirty working directory.',
        examples=('git stash', 'git stash pop', 'git stash list', 'git stash apply stash@{0}'),
        use_cases=(
            'Switching branches with uncommitted changes',
            'Temporarily saving work in progress',
            'Cleaning working directory quickly',
        ),
        related_commands=('git checkout', 'git commit', 'git reset'),
    ),
    Topic(
        id='reset',
        name='git reset',
        category='Advanced',
        description='Reset current HEAD to the specified state.',
        examples=(
            'git reset HEAD~1',
            'git reset --hard HEAD~1',
            'git reset --soft HEAD~1',
            'git reset file.txt',
        ),
        use_cases=(
            'Undoing commits',
            'Unstaging files',
            'Moving branch pointer to different commit',
        ),
        related_commands=('git revert', 'git checkout', 'git stash'),
    ),
    Topic(
        id='cherry-pick',
        name='git cherry-pick',
        category='Advanced',
        description='Apply the changes introduced by specific commits.',
        examples=('git cherry-pick abc123', 'git cherry-pick abc123..def456', 'git cherry-pick -n abc123'),
        use_cases=(
            'Applying specific fixes from other branches',
            'Selectively bringing changes',
            'Hotfix deployment',
        ),
        related_commands=('git rebase', 'git merge', 'git revert'),
    ),
    Topic(
        id='tag',
        name='git tag',
        category='Advanced',
        description='Create, list, delete or verify tags.',
        examples=(
            'git tag v1.0.0',
            'git tag -a v1.0.0 -m "Version 1.0.0"',
            'git tag -d v1.0.0',
            'git push origin v1.0.0',
        ),
        use_cases=(
            'Marking release points',
            'Creating version milestones',
            'Referencing specific commits',
        ),
        related_commands=('git commit', 'git push', 'git checkout'),
    ),
)


def get_topic(topic_id: str) -> Optional[Topic]:
    """Look up a topic by id or by command name ("reset" or "git reset")."""
    key = topic_id.strip().lower()
    for topic in TOPICS:
        if topic.id == key or topic.name == key:
            return topic
    return None


def list_categories() -> List[str]:
    """Categories in catalog order."""
    return list(dict.fromkeys(t.category for t in TOPICS))


def topics_in_category(category: str) -> List[Topic]:
    return [t for t in TOPICS if t.category.lower() == category.lower()]


def _score(topic: Topic, query: str) -> Tuple[int, int]:
    """(best score over all searchable text, score against the id alone)."""
    fields = [topic.id, topic.name, topic.description, *topic.use_cases]
    best = max(int(fuzz.partial_ratio(query, f.lower())) for f in fields)
    return best, int(fuzz.partial_ratio(query, topic.id))


def search_topics(
    query: str = "",
    category: Optional[str] = None,
    threshold: int = DEFAULT_THRESHOLD,
) -> List[Topic]:
    """
    Fuzzy search over name, description and use cases.

    Args:
        query: Free text; empty returns every topic in catalog order
        category: Restrict to one category (case-insensitive)
        threshold: Minimum rapidfuzz partial_ratio score (0-100)

    Returns:
        Matching topics, best match first
    """
    candidates = topics_in_category(category) if category else list(TOPICS)
    query = query.strip().lower()
    if not query:
        return candidates

    scored = [(_score(t, query), i, t) for i, t in enumerate(candidates)]
    matches = [(s, i, t) for s, i, t in scored if s[0] >= threshold]
    # Ties on the overall score go to the topic whose id matches best
    matches.sort(key=lambda item: (-item[0][0], -item[0][1], item[1]))
    logger.debug(f"Topic search {query!r}: {len(matches)} of {len(candidates)} matched")
    return [t for _, _, t in matches]
