"""Repository lookup shared by CLI commands."""

import click

from gitpeek.core.config import get_config
from gitpeek.core.repository import Repository, open_repository


class Session:
    """Options given to the top-level command, handed down to subcommands."""

    def __init__(self, git_dir=None, start='.', dir_name='.git'):
        self.git_dir = git_dir
        self.start = start
        self.dir_name = dir_name


def require_repository() -> Repository:
    """
    Open the repository selected by the global options.

    Returns:
        Repository: Opened repository

    Raises:
        NotARepositoryError: If no repository can be found
    """
    ctx = click.get_current_context()
    session = ctx.find_object(Session) or Session()
    repo = open_repository(session.git_dir, session.start, session.dir_name)

    if not get_config(repo).use_color:
        ctx.color = False

    return repo
