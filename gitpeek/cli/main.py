"""Main CLI entry point for gitpeek."""

import logging

import click
from colorama import init

from gitpeek import __version__
from gitpeek.core.config import Config
from gitpeek.cli.output import BANNER
from gitpeek.cli.repo import Session
from gitpeek.cli.commands import branch_cmd, cat_file_cmd

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


class PeekGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=PeekGroup, invoke_without_command=True,
             context_settings={'help_option_names': ['-h', '--help']})
@click.option('--branch', is_flag=True, help='List all branches')
@click.option('--hash', 'object_hash', metavar='HASH', help='Hash of the object file to decode')
@click.option('--git-dir', type=click.Path(file_okay=False), help='Path to the repository directory')
@click.option('-C', 'start', default='.', type=click.Path(file_okay=False),
              help='Look for the repository starting from this directory')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('-v', '--verbose', is_flag=True, help='Log debug information to stderr')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, branch, object_hash, git_dir, start, no_color, verbose):
    """
    Inspect the object database and branches of a Git repository.

    Use --branch to list branches or --hash to decode one object,
    or the equivalent branch and cat-file subcommands.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    config = Config()
    if no_color or not config.use_color:
        ctx.color = False

    ctx.obj = Session(git_dir=git_dir, start=start, dir_name=config.git_dir_name)

    if ctx.invoked_subcommand is not None:
        if branch or object_hash:
            raise click.UsageError("--branch and --hash cannot be combined with a subcommand")
        return

    if branch:
        ctx.invoke(branch_cmd)
    elif object_hash:
        ctx.invoke(cat_file_cmd, object_hash=object_hash)
    else:
        click.echo("No flag selected.. Try --help|-h")


# Register commands
cli.add_command(branch_cmd)
cli.add_command(cat_file_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
