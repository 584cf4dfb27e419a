"""Cat-file command - decode a single loose object."""

import click

from gitpeek.core.errors import GitPeekError
from gitpeek.core.objects import TRUNCATED_SIZE, decode_header, render_object
from gitpeek.cli.output import error, object_summary
from gitpeek.cli.repo import require_repository


def _emit(chunk):
    """Write a piece of rendered output as-is, text or raw bytes."""
    click.echo(chunk, nl=False)


@click.command('cat-file')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show only the object type')
@click.option('-s', '--size', 'show_size', is_flag=True, help='Show only the declared object size')
@click.option('--parse-commit', is_flag=True, help='Show commits as structured fields')
@click.option('--no-truncate', is_flag=True, help='Show whole blobs instead of the first 3KB')
@click.argument('object_hash')
def cat_file_cmd(show_type, show_size, parse_commit, no_truncate, object_hash):
    """
    Decode and print a loose object.

    OBJECT_HASH is a full object id or a unique prefix of at least
    4 characters. The header summary is printed first, followed by the
    body: blob content (first 3KB), tree entries, or commit text.

    Examples:
        gitpeek cat-file 3b18e512dba79e4c8300dd08aeb37f8e728b8dad
        gitpeek cat-file 3b18e5                  # Unique prefix
        gitpeek cat-file -t 3b18e5               # Only the type
        gitpeek cat-file --parse-commit HASH     # Structured commit view
    """
    try:
        repo = require_repository()

        with repo.open_object(object_hash) as reader:
            if show_type or show_size:
                header = decode_header(reader)
                click.echo(header.type if show_type else header.length)
                return

            blob_limit = None if no_truncate else TRUNCATED_SIZE
            render_object(reader, _emit, blob_limit=blob_limit,
                          parse_commit=parse_commit, style_summary=object_summary)

    except GitPeekError as e:
        click.echo(error(str(e)), err=True)
        raise click.Abort()
