"""Branch command - list branches."""

import click

from gitpeek.core.errors import GitPeekError
from gitpeek.cli.output import error, warning, current_branch
from gitpeek.cli.repo import require_repository


@click.command('branch')
def branch_cmd():
    """
    List local branches.

    Each branch is printed with the object id it points to. The branch
    HEAD refers to is marked with *.

    Examples:
        gitpeek branch
        gitpeek --branch        # Same as above
    """
    try:
        repo = require_repository()
        refs_mgr = repo.refs

        if refs_mgr.is_detached_head():
            click.echo(warning(f"HEAD detached at {refs_mgr.resolve_head()}"))

        branches = refs_mgr.list_branches()
        if not branches:
            click.echo(warning("No branches found"))
            return

        for ref in branches:
            line = ref.describe()
            click.echo(current_branch(line) if ref.current else line)

    except GitPeekError as e:
        click.echo(error(str(e)), err=True)
        raise click.Abort()
